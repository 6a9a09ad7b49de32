"""
licensing.registry
==================

Store‑backed registry of :class:`licensing.models.Person` records.

Every public call loads the full record set, validates and mutates it in
memory, and on success writes the whole set back.  Nothing is cached
between calls.

Two surfaces are offered:

* ``register`` / ``amend`` / ``record_demerits`` raise
  :class:`~licensing.models.RegistryError` with a typed
  :class:`~licensing.models.Rejection` reason.
* ``add_person`` / ``update_personal_details`` / ``add_demerit_points``
  collapse every rejection into ``False`` or :attr:`Outcome.FAILED`.
"""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Callable, Dict, Iterator, List, Optional

from . import demerits
from .models import Outcome, Person, RegistryError, Rejection
from .store import FlatFileStore
from .validation import is_valid_address, is_valid_person_id, parse_date

logger = logging.getLogger(__name__)

ADULT_AGE = 18


class PersonRegistry:
    """
    Flat‑file registry of licensed persons and their offenses.

    Example
    -------
    >>> reg = PersonRegistry("persons.txt")
    >>> reg.add_person("56s_d%&fAB", "John", "Doe",
    ...                "32|Main St|Melbourne|Victoria|Australia", "15-11-2000")
    True
    >>> reg.add_demerit_points("56s_d%&fAB", "01-01-2024", 3)
    <Outcome.SUCCESS: 'Success'>
    """

    def __init__(
        self,
        store_path: str | os.PathLike | None = None,
        *,
        store: Optional[FlatFileStore] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store or FlatFileStore(store_path)
        self._today = today

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load(self) -> Dict[str, Person]:
        return self._store.load()

    def _save(self, people: Dict[str, Person]) -> None:
        self._store.save(people.values())

    @staticmethod
    def _lookup(people: Dict[str, Person], person_id: str) -> Person:
        person = people.get(person_id)
        if person is None:
            raise RegistryError(Rejection.NOT_FOUND, person_id)
        return person

    @staticmethod
    def _check_format(person_id: str, address: str, birth_date: str) -> None:
        if not is_valid_person_id(person_id):
            raise RegistryError(Rejection.INVALID_ID, person_id)
        if not is_valid_address(address):
            raise RegistryError(Rejection.INVALID_ADDRESS, address)
        if parse_date(birth_date) is None:
            raise RegistryError(Rejection.INVALID_DATE, birth_date)

    @staticmethod
    def _id_locked(person_id: str) -> bool:
        """Ids starting with an even digit can never be changed."""
        first = person_id[:1]
        return first.isdigit() and int(first) % 2 == 0

    # ------------------------------------------------------------------
    # Typed API
    # ------------------------------------------------------------------
    def register(
        self, person_id: str, first_name: str, last_name: str, address: str, birth_date: str
    ) -> Person:
        """Create a new, unsuspended person with no offenses and persist it."""
        self._check_format(person_id, address, birth_date)

        people = self._load()
        if person_id in people:
            raise RegistryError(Rejection.DUPLICATE_ID, person_id)

        person = Person(person_id, first_name, last_name, address, birth_date)
        people[person_id] = person
        self._save(people)
        logger.info(f"Added person {person_id}")
        return person

    def amend(
        self,
        old_id: str,
        new_id: str,
        first_name: str,
        last_name: str,
        address: str,
        birth_date: str,
    ) -> Person:
        """
        Overwrite the personal details of *old_id*.

        Rules, checked in order:

        1. a birth‑date change must come alone (the raw strings are
           compared, so ``"01-02-2000"`` vs ``"1-02-2000"`` counts as a
           change);
        2. under‑18s (age from the *stored* birth date, as of today) may
           not move address;
        3. an id whose first digit is even is frozen;
        4. the new id, address and birth date must be well formed, and
           the new id must not belong to someone else.

        Offenses and the suspension flag are left untouched.
        """
        people = self._load()
        person = self._lookup(people, old_id)

        stored_birth = parse_date(person.birth_date)
        if stored_birth is None:
            raise RegistryError(Rejection.INVALID_DATE, person.birth_date)
        current_age = demerits.age_on(stored_birth, self._today())

        birthday_changed = birth_date != person.birth_date
        if birthday_changed and (
            new_id != person.person_id
            or first_name != person.first_name
            or last_name != person.last_name
            or address != person.address
        ):
            raise RegistryError(Rejection.BIRTHDATE_NOT_ISOLATED, old_id)

        if current_age < ADULT_AGE and address != person.address:
            raise RegistryError(Rejection.MINOR_ADDRESS_CHANGE, old_id)

        if new_id != old_id and self._id_locked(old_id):
            raise RegistryError(Rejection.ID_LOCKED, old_id)

        self._check_format(new_id, address, birth_date)
        if new_id != old_id and new_id in people:
            raise RegistryError(Rejection.DUPLICATE_ID, new_id)

        person.person_id = new_id
        person.first_name = first_name
        person.last_name = last_name
        person.address = address
        person.birth_date = birth_date

        # re‑key in place so the record keeps its position in the file
        people = {(new_id if key == old_id else key): p for key, p in people.items()}
        self._save(people)
        logger.info(f"Updated person {old_id}" + (f" → {new_id}" if new_id != old_id else ""))
        return person

    def record_demerits(self, person_id: str, offense_date: str, points: int) -> Person:
        """Attach an offense to *person_id* and re‑evaluate suspension."""
        when = parse_date(offense_date)
        if when is None:
            raise RegistryError(Rejection.INVALID_DATE, offense_date)
        if not demerits.points_in_range(points):
            raise RegistryError(Rejection.INVALID_POINTS, str(points))

        people = self._load()
        person = self._lookup(people, person_id)

        demerits.record_offense(person, when, offense_date, points)
        self._save(people)
        logger.info(f"Recorded {points} points for {person_id} on {offense_date}")
        return person

    # ------------------------------------------------------------------
    # Compatibility API
    # ------------------------------------------------------------------
    def add_person(
        self, person_id: str, first_name: str, last_name: str, address: str, birth_date: str
    ) -> bool:
        try:
            self.register(person_id, first_name, last_name, address, birth_date)
        except RegistryError as e:
            logger.warning(f"add_person rejected: {e}")
            return False
        return True

    def update_personal_details(
        self,
        old_id: str,
        new_id: str,
        first_name: str,
        last_name: str,
        address: str,
        birth_date: str,
    ) -> bool:
        try:
            self.amend(old_id, new_id, first_name, last_name, address, birth_date)
        except RegistryError as e:
            logger.warning(f"update_personal_details rejected: {e}")
            return False
        return True

    def add_demerit_points(self, person_id: str, offense_date: str, points: int) -> Outcome:
        """Return :attr:`Outcome.SUCCESS` or :attr:`Outcome.FAILED` (unknown ids included)."""
        try:
            self.record_demerits(person_id, offense_date, points)
        except RegistryError as e:
            logger.warning(f"add_demerit_points rejected: {e}")
            return Outcome.FAILED
        return Outcome.SUCCESS

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------
    def get(self, person_id: str) -> Person:
        """Retrieve by id (raise KeyError if not present)."""
        return self._load()[person_id]

    def find_suspended(self) -> List[Person]:
        """Return all persons whose licence is suspended."""
        return [p for p in self._load().values() if p.suspended]

    def __iter__(self) -> Iterator[Person]:
        return iter(self._load().values())

    def __len__(self) -> int:
        return len(self._load())

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._load()
