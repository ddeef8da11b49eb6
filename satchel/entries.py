"""satchel.entries

The satchel data model and its list operations.

A satchel is a plain `list[str]` of absolute file paths. Position is priority: index 0 is the
front (the default pick). Entries compare by exact string equality and never repeat.

Every operation here is pure: it returns a new list and leaves its input untouched. Callers
persist the result explicitly via `SatchelStore.save`.
"""

from __future__ import annotations

from typing import Sequence

from .errors import EmptySatchel

Satchel = list[str]


def add(satchel: Sequence[str], entry: str) -> Satchel:
    """Append `entry` unless it is already present. Never reorders."""
    out = list(satchel)
    if entry not in out:
        out.append(entry)
    return out


def remove(satchel: Sequence[str], entry: str) -> Satchel:
    return [e for e in satchel if e != entry]


def promote(satchel: Sequence[str], entry: str) -> Satchel:
    """Move `entry` to the front (prepends it when absent)."""
    return [entry, *remove(satchel, entry)]


def demote(satchel: Sequence[str], entry: str) -> Satchel:
    """Move `entry` to the back (appends it when absent)."""
    return [*remove(satchel, entry), entry]


def pick_default(satchel: Sequence[str]) -> str | None:
    return satchel[0] if satchel else None


def require_entries(satchel: Sequence[str], *, scope_key: str | None = None) -> Satchel:
    if not satchel:
        raise EmptySatchel(scope_key)
    return list(satchel)


def find_duplicates(satchel: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    dups: list[str] = []
    for e in satchel:
        if e in seen and e not in dups:
            dups.append(e)
        seen.add(e)
    return dups
