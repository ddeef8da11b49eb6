"""Git lookups used to scope a satchel.

Satchel needs two facts from version control, both obtained by shelling out to `git`:

- `GitClient.project_root() -> Path`
  `git rev-parse --show-toplevel` run from the client's `cwd`. This is the default project
  root when no default-directory override is configured.
- `GitClient.current_branch(root) -> str`
  `git rev-parse --abbrev-ref HEAD` run in `root`. Raises `RuntimeError` on a detached
  HEAD, since a satchel is keyed by a branch name.

All invocations go through `_git(...)` with `check=True`, so failures (not a repository,
git missing) surface as `subprocess.CalledProcessError` / `FileNotFoundError` and are left
for the caller to report.
"""

from __future__ import annotations

import subprocess
from pathlib import Path


class GitClient:
    def __init__(self, *, cwd: Path) -> None:
        self.cwd = cwd

    def project_root(self) -> Path:
        out = self._git(["rev-parse", "--show-toplevel"], cwd=self.cwd)
        return Path(out.strip()).resolve()

    def current_branch(self, root: Path) -> str:
        out = self._git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=root)
        out = out.strip()
        if out == "HEAD":
            raise RuntimeError("Detached HEAD; check out a branch or pass --branch.")
        return out

    def _git(self, args: list[str], *, cwd: Path) -> str:
        p = subprocess.run(
            ["git", *args],
            cwd=cwd,
            text=True,
            check=True,
            capture_output=True,
        )
        return p.stdout
