"""
licensing.store
===============

Flat‑file persistence for the registry.

One person per line, comma‑separated, in fixed order::

    id,firstName,lastName,address,birthDate,suspended[,date:points]*

The whole file is read on every load and rewritten on every save.  A
field containing a comma cannot be represented; such records come back
mangled.  The format is kept as‑is for compatibility with existing
files.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .models import Offense, Person
from .settings import settings

logger = logging.getLogger(__name__)

FIELD_SEP = ","
OFFENSE_SEP = ":"
_FIXED_FIELDS = 6


class StoreFormatError(ValueError):
    """A store line could not be decoded into a :class:`Person`."""


# ---------------------------------------------------------------------------
# Line codec
# ---------------------------------------------------------------------------
def encode_person(person: Person) -> str:
    """Render *person* as a single store line (no trailing newline)."""
    fields = [
        person.person_id,
        person.first_name,
        person.last_name,
        person.address,
        person.birth_date,
        "true" if person.suspended else "false",
    ]
    fields.extend(f"{o.date}{OFFENSE_SEP}{o.points}" for o in person.offenses)
    return FIELD_SEP.join(fields)


def decode_person(line: str, lineno: int = 0) -> Person:
    """
    Parse one store line.

    Offense fields that do not split into exactly ``date:points`` are
    dropped.  Raises :class:`StoreFormatError` if fewer than six fields
    are present or a points value is not an integer.
    """
    parts = line.split(FIELD_SEP)
    if len(parts) < _FIXED_FIELDS:
        raise StoreFormatError(f"line {lineno}: expected at least {_FIXED_FIELDS} fields, got {len(parts)}")

    person = Person(
        person_id=parts[0],
        first_name=parts[1],
        last_name=parts[2],
        address=parts[3],
        birth_date=parts[4],
        suspended=parts[5].strip().lower() == "true",
    )
    for raw in parts[_FIXED_FIELDS:]:
        pieces = raw.split(OFFENSE_SEP)
        if len(pieces) != 2:
            logger.warning(f"line {lineno}: ignoring malformed offense field '{raw}'")
            continue
        try:
            points = int(pieces[1])
        except ValueError as e:
            raise StoreFormatError(f"line {lineno}: bad points value '{pieces[1]}'") from e
        person.offenses.append(Offense(pieces[0], points))
    return person


# ---------------------------------------------------------------------------
# File store
# ---------------------------------------------------------------------------
class FlatFileStore:
    """
    Reads and writes the full record set as a line‑oriented text file.

    Example
    -------
    >>> store = FlatFileStore("persons.txt")
    >>> people = store.load()          # {} if the file does not exist yet
    >>> store.save(people.values())
    """

    def __init__(self, path: str | os.PathLike | None = None, encoding: Optional[str] = None) -> None:
        self.path = Path(path) if path is not None else Path(settings.store_file)
        self.encoding = encoding or settings.store_encoding

    def load(self) -> Dict[str, Person]:
        """Return every stored person keyed by id, in file order."""
        if not self.path.exists():
            return {}
        people: Dict[str, Person] = {}
        with self.path.open("r", encoding=self.encoding) as fh:
            for lineno, line in enumerate(fh, start=1):
                line = line.rstrip("\r\n")
                if not line.strip():
                    continue
                person = decode_person(line, lineno)
                if person.person_id in people:
                    logger.warning(f"line {lineno}: duplicate id {person.person_id} replaces an earlier record")
                people[person.person_id] = person
        return people

    def save(self, people: Iterable[Person]) -> None:
        """
        Replace the store contents with *people*.

        The new contents are written to a temporary file next to the store
        and moved into place, so a failed write leaves the old file intact.
        """
        lines: List[str] = [encode_person(p) + "\n" for p in people]
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as fh:
                fh.writelines(lines)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(lines)} records to {self.path}")
