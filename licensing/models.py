"""
licensing.models
================

Dataclasses and enums representing a licensed person, their offense
history, and the outcomes of registry operations.  These objects carry
**no** external‑library dependencies so that importing `licensing`
stays fast.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List


class Outcome(str, Enum):
    """Result of a demerit‑point operation (compares equal to the literal)."""
    SUCCESS = "Success"
    FAILED = "Failed"

    def __str__(self) -> str:
        return self.value


class Rejection(Enum):
    """Why a registry operation refused to change anything."""
    INVALID_ID = auto()
    INVALID_ADDRESS = auto()
    INVALID_DATE = auto()
    INVALID_POINTS = auto()
    DUPLICATE_ID = auto()
    NOT_FOUND = auto()
    BIRTHDATE_NOT_ISOLATED = auto()
    MINOR_ADDRESS_CHANGE = auto()
    ID_LOCKED = auto()

    def __str__(self) -> str:        # nicer REPL display
        return self.name


class RegistryError(ValueError):
    """Raised by the typed registry surface; carries a :class:`Rejection`."""

    def __init__(self, reason: Rejection, detail: str = "") -> None:
        self.reason = reason
        super().__init__(f"{reason.name}: {detail}" if detail else reason.name)


@dataclass
class Offense:
    """A dated demerit‑point event.  ``date`` is kept in ``dd-MM-yyyy`` form."""
    date: str
    points: int


@dataclass
class Address:
    """Structured view of a ``number|street|city|state|country`` address."""
    street_number: str
    street_name: str
    city: str
    state: str
    country: str

    def __str__(self) -> str:
        return "|".join(
            (self.street_number, self.street_name, self.city, self.state, self.country)
        )


@dataclass
class Person:
    """
    Core record tracked by the registry.

    Parameters
    ----------
    person_id : str
        Ten‑character licence identifier, unique across the registry.
    first_name, last_name : str
        Given and family names.
    address : str
        ``number|street|city|state|country`` encoded address.
    birth_date : str
        Date of birth as ``dd-MM-yyyy``.  Stored verbatim so that
        comparisons against new input are literal.
    suspended : bool, default=False
        Licence suspension flag.  Once set it is never cleared.
    offenses : list[Offense], default=[]
        Offense history in the order it was recorded.
    """
    person_id: str
    first_name: str
    last_name: str
    address: str
    birth_date: str
    suspended: bool = False
    offenses: List[Offense] = field(default_factory=list)
