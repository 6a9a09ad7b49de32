"""
Licensing
=========

A small registry of licensed persons, their offense history and the
demerit‑point rules that lead to licence suspension, persisted to a
line‑oriented flat file.

Sub‑modules
~~~~~~~~~~~
- :pymod:`licensing.models`      – ``Person`` / ``Offense`` dataclasses, ``Outcome`` and ``Rejection`` enums
- :pymod:`licensing.validation`  – id, address and date format rules
- :pymod:`licensing.demerits`    – age, look‑back window and suspension guard
- :pymod:`licensing.store`       – ``FlatFileStore`` line codec and file I/O
- :pymod:`licensing.registry`    – ``PersonRegistry`` operations
- :pymod:`licensing.settings`    – environment‑driven configuration

Quick start
-----------
>>> from licensing.registry import PersonRegistry
>>> reg = PersonRegistry("persons.txt")
>>> reg.add_person("56s_d%&fAB", "John", "Doe",
...                "32|Main St|Melbourne|Victoria|Australia", "15-11-2000")
True
>>> reg.get("56s_d%&fAB").suspended
False

"""

__all__ = [
    "models",
    "validation",
    "demerits",
    "store",
    "registry",
    "settings",
]

__version__ = "0.1.0"
