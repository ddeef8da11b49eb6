"""satchel.store

Persistence of satchels, one file per scope.

Scope keys
A scope is a (project root, branch) pair. `resolve_scope(root, branch)` turns it into a
file-name-safe key of the form `{root}#{branch}` where each part is normalized with a
prefix-free escape table:

    "!" -> "!-"    "/" -> "!!"    "#" -> "!#"

So `("/proj", "feature/x")` becomes `!!proj#feature!!x`. Because every `!` in a normalized
part starts a two-character escape and `#` only ever appears escaped, the single bare `#` is
unambiguous and two different scopes can never produce the same key.

Files
- `<storage_dir>/<file name>` holds the serialized satchel (see `satchel.sexp`). The file name
  is the scope key itself while its UTF-8 form fits in `MAX_NAME_BYTES`. Longer keys (deep
  roots, long branch names) are stored as `{prefix}##{sha256 of the key}`, where the prefix is
  the start of the key with `!` and `#` runs replaced by `_`. A readable key has exactly one
  unescaped `#` and a hashed name has two, so the two kinds of name never collide.
- `save()` writes to a temporary file in the same directory and `os.replace()`s it over the
  target, so a reader sees either the old or the new content.
- `burn()` deletes the file. Missing files load as the empty satchel.
"""

from __future__ import annotations

import hashlib
import os
import re
import tempfile
from pathlib import Path
from typing import Sequence

from .entries import Satchel, find_duplicates
from .errors import CorruptStore
from .sexp import deserialize, serialize

SCOPE_SEPARATOR = "#"

# Below NAME_MAX (255) on common filesystems.
MAX_NAME_BYTES = 200
_PREFIX_BYTES = 120

_ESCAPE_TABLE = str.maketrans({"!": "!-", "/": "!!", "#": "!#"})


def normalize_part(part: str) -> str:
    return part.translate(_ESCAPE_TABLE)


def resolve_scope(root: str | os.PathLike[str], branch: str) -> str:
    return f"{normalize_part(os.fspath(root))}{SCOPE_SEPARATOR}{normalize_part(branch)}"


def scope_file_name(scope_key: str) -> str:
    if len(scope_key.encode("utf-8")) <= MAX_NAME_BYTES:
        return scope_key
    digest = hashlib.sha256(scope_key.encode("utf-8")).hexdigest()
    head = scope_key.encode("utf-8")[:_PREFIX_BYTES].decode("utf-8", errors="ignore")
    prefix = re.sub(r"[!#]+", "_", head)
    return f"{prefix}{SCOPE_SEPARATOR * 2}{digest}"


class SatchelStore:
    def __init__(self, *, storage_dir: Path) -> None:
        self.storage_dir = storage_dir

    def path_for(self, scope_key: str) -> Path:
        return self.storage_dir / scope_file_name(scope_key)

    def load(self, scope_key: str) -> Satchel:
        path = self.path_for(scope_key)
        if not path.exists():
            return []
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptStore(path, f"not valid UTF-8 ({e.reason})") from e
        try:
            entries = deserialize(text)
        except ValueError as e:
            raise CorruptStore(path, str(e)) from e
        dups = find_duplicates(entries)
        if dups:
            raise CorruptStore(path, f"duplicate entries: {', '.join(dups)}")
        return entries

    def save(self, scope_key: str, satchel: Sequence[str]) -> None:
        self.ensure_directory()
        path = self.path_for(scope_key)
        fd, tmp_name = tempfile.mkstemp(prefix=".tmp-", dir=self.storage_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(serialize(satchel))
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def burn(self, scope_key: str) -> None:
        self.path_for(scope_key).unlink(missing_ok=True)

    def ensure_directory(self) -> None:
        self.storage_dir.mkdir(parents=True, exist_ok=True)

