"""satchel.config

Runtime configuration for satchel.

Sources, highest priority first:
- `SATCHEL_DIR`: storage directory for scope files (default `~/.satchel`).
- `SATCHEL_DEFAULT_DIRECTORY`: default-directory override, used instead of the git project
  root when resolving the scope.
- `<storage_dir>/config.json`: `{"default_directory": "/some/dir"}` as written by
  `satchel set-default-directory`.

The override is carried on `SatchelConfig` and handed to root resolution explicitly; nothing
here keeps process-wide state.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

CONFIG_FILENAME = "config.json"


def default_storage_dir() -> Path:
    return Path.home() / ".satchel"


@dataclass(frozen=True)
class SatchelConfig:
    storage_dir: Path
    default_directory: Path | None = None

    @property
    def config_path(self) -> Path:
        return self.storage_dir / CONFIG_FILENAME


def load_config(environ: Mapping[str, str] | None = None, *, storage_dir: Path | None = None) -> SatchelConfig:
    env = os.environ if environ is None else environ
    if storage_dir is None:
        storage_dir = Path(env["SATCHEL_DIR"]).expanduser() if env.get("SATCHEL_DIR") else default_storage_dir()
    storage_dir = storage_dir.resolve()

    override = env.get("SATCHEL_DEFAULT_DIRECTORY")
    if override:
        return SatchelConfig(storage_dir=storage_dir, default_directory=Path(override).expanduser().resolve())

    raw = _read_config_file(storage_dir / CONFIG_FILENAME)
    stored = raw.get("default_directory")
    return SatchelConfig(
        storage_dir=storage_dir,
        default_directory=(Path(str(stored)) if stored else None),
    )


def save_default_directory(storage_dir: Path, directory: Path | None) -> None:
    """Persist (or clear, when `directory` is None) the default-directory override."""
    path = storage_dir / CONFIG_FILENAME
    raw = _read_config_file(path)
    if directory is None:
        raw.pop("default_directory", None)
    else:
        raw["default_directory"] = str(directory)
    storage_dir.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(raw, indent=2, ensure_ascii=True) + "\n", encoding="utf-8")


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{CONFIG_FILENAME} must be a JSON object, got {type(raw)}")
    return raw
