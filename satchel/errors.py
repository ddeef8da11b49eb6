"""Error taxonomy for satchel.

Only two failure kinds exist in the core:

- `EmptySatchel`: an action that needs at least one entry (pick, lucky, drop, promote,
  demote) was invoked on an empty satchel.
- `CorruptStore`: a persisted satchel file could not be parsed.

Both derive from `SatchelError` so the CLI can report them as plain rejection messages.
Git and filesystem failures are not wrapped; they propagate as-is.
"""

from __future__ import annotations

from pathlib import Path


class SatchelError(Exception):
    """Base class for user-facing satchel failures."""


class EmptySatchel(SatchelError):
    def __init__(self, scope_key: str | None = None) -> None:
        self.scope_key = scope_key
        msg = "Satchel is empty"
        if scope_key:
            msg += f" ({scope_key})"
        super().__init__(msg)


class CorruptStore(SatchelError):
    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = f" at {path}" if path is not None else ""
        super().__init__(f"Corrupt satchel file{where}: {reason}. Burn it or remove it manually.")
