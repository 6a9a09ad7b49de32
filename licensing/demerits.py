"""
licensing.demerits
==================

Demerit‑point accrual and the suspension guard for a
:class:`licensing.models.Person`.

The helper :pyfunc:`record_offense` mutates a person **in‑place**: it
appends the offense, totals the points that fall inside the look‑back
window around the offense date, and sets the suspension flag when the
age‑dependent threshold is exceeded.  Suspension is never lifted.
"""

from __future__ import annotations

import logging
from datetime import date

from .models import Offense, Person
from .validation import parse_date

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------
MIN_POINTS = 1
MAX_POINTS = 6
WINDOW_DAYS = 730

# age below which the stricter limit applies → max points tolerated
PROVISIONAL_AGE = 21
PROVISIONAL_LIMIT = 6
FULL_LIMIT = 12


def age_on(birth: date, on: date) -> int:
    """Whole years elapsed between *birth* and *on*."""
    years = on.year - birth.year
    if (on.month, on.day) < (birth.month, birth.day):
        years -= 1
    return years


def points_in_range(points: int) -> bool:
    """Only plain integers count; ``True`` and ``3.5`` are rejected."""
    if isinstance(points, bool) or not isinstance(points, int):
        return False
    return MIN_POINTS <= points <= MAX_POINTS


def points_within_window(person: Person, around: date) -> int:
    """
    Sum the points of every offense dated within :data:`WINDOW_DAYS`
    of *around* (absolute difference, inclusive).

    Offenses whose stored date no longer parses are skipped.
    """
    total = 0
    for offense in person.offenses:
        when = parse_date(offense.date)
        if when is None:
            logger.warning(f"Skipping offense with unreadable date '{offense.date}' for {person.person_id}")
            continue
        if abs((when - around).days) <= WINDOW_DAYS:
            total += offense.points
    return total


def exceeds_limit(age: int, total: int) -> bool:
    """
    Return ``True`` if *total* points are over the limit for *age*.

    Examples
    --------
    >>> exceeds_limit(19, 7)
    True
    >>> exceeds_limit(30, 12)
    False
    """
    limit = PROVISIONAL_LIMIT if age < PROVISIONAL_AGE else FULL_LIMIT
    return total > limit


def record_offense(person: Person, offense_date: date, date_text: str, points: int) -> bool:
    """
    Append an offense to *person* and apply the suspension rule.

    *offense_date* is the parsed form of *date_text*; the text is what
    gets stored.  Returns the person's suspension flag after the update.
    """
    birth = parse_date(person.birth_date)
    person.offenses.append(Offense(date_text, points))

    total = points_within_window(person, offense_date)
    if birth is None:
        logger.warning(f"Cannot determine age for {person.person_id}; suspension not evaluated")
        return person.suspended

    age = age_on(birth, offense_date)
    if not person.suspended and exceeds_limit(age, total):
        person.suspended = True
        logger.info(f"Suspended {person.person_id}: {total} points within {WINDOW_DAYS} days at age {age}")
    return person.suspended
