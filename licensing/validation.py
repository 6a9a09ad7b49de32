"""
licensing.validation
====================

Pure format rules for the three externally encoded inputs: the person
id, the ``|``‑separated address and the ``dd-MM-yyyy`` date.

Nothing here touches the store and nothing raises for bad input.  Date
parsing hands back ``None`` instead of an exception so callers can treat
"unparseable" as an ordinary branch.
"""

from __future__ import annotations

import calendar
import re
from datetime import date
from typing import Optional

from .models import Address

# ---------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------
ID_LENGTH = 10
SPECIAL_CHARACTERS = frozenset("!@#$%^&*()_+=[]{};':\"\\|,.<>/?~-")
MIN_SPECIALS = 2

ADDRESS_DELIMITER = "|"
ADDRESS_FIELDS = 5
REQUIRED_STATE = "Victoria"

_DATE_RE = re.compile(r"([0-9]{2})-([0-9]{2})-([0-9]{4})")


# ---------------------------------------------------------------------
# Person id
# ---------------------------------------------------------------------
def is_valid_person_id(person_id: str) -> bool:
    """
    Return ``True`` if *person_id* has the licence‑id shape.

    * exactly ten characters
    * characters 1–2 are digits between 2 and 9
    * characters 3–8 hold at least two special characters
    * characters 9–10 are upper‑case ASCII letters

    Examples
    --------
    >>> is_valid_person_id("56s_d%&fAB")
    True
    >>> is_valid_person_id("12abcdefXY")
    False
    """
    if len(person_id) != ID_LENGTH:
        return False
    if not all(c in "23456789" for c in person_id[:2]):
        return False
    if sum(c in SPECIAL_CHARACTERS for c in person_id[2:8]) < MIN_SPECIALS:
        return False
    return all("A" <= c <= "Z" for c in person_id[8:])


# ---------------------------------------------------------------------
# Address
# ---------------------------------------------------------------------
def parse_address(address: str) -> Optional[Address]:
    """Split *address* into an :class:`Address`, or ``None`` if it is malformed."""
    parts = address.split(ADDRESS_DELIMITER)
    if len(parts) != ADDRESS_FIELDS:
        return None
    parsed = Address(*parts)
    if parsed.state != REQUIRED_STATE:
        return None
    return parsed


def is_valid_address(address: str) -> bool:
    return parse_address(address) is not None


# ---------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------
def parse_date(text: str) -> Optional[date]:
    """
    Parse a zero‑padded ``dd-MM-yyyy`` string.

    Returns the :class:`datetime.date` on success and ``None`` for any
    other shape (ISO dates, missing padding) or for a day that does not
    exist in the given month.
    """
    match = _DATE_RE.fullmatch(text)
    if match is None:
        return None
    day, month, year = (int(g) for g in match.groups())
    if year < 1 or not 1 <= month <= 12:
        return None
    if not 1 <= day <= calendar.monthrange(year, month)[1]:
        return None
    return date(year, month, day)


def is_valid_date(text: str) -> bool:
    return parse_date(text) is not None
