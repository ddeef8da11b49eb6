"""satchel: a small, ordered list of files kept per project root and git branch.

A satchel is the handful of files you keep coming back to while working on a branch. This
package stores one such list per scope, where a scope is the pair (project root, branch),
and exposes it as a CLI (`satchel.cli:main`, runnable via `python -m satchel`).

What satchel provides
- Pure list operations (`satchel.entries`): add, remove, promote, demote, pick_default.
- A file-per-scope store (`satchel.store.SatchelStore`) with atomic saves and a
  collision-free scope-key encoding (`satchel.store.resolve_scope`).
- A Lisp-style text format for the stored lists (`satchel.sexp`).
- Git lookups for the project root and current branch (`satchel.git_ops`).

Important invariants and conventions
- Entries are absolute paths, unique within a satchel, compared as exact strings.
- Order is priority: the front entry is what `lucky` opens.
- Every command does at most one load and one save; there is no cache and no locking.
- A file that cannot be parsed raises `CorruptStore` and is never partially read.

Key exports from this module
- `__version__`: the package version string. (`__all__` is intentionally limited to this.)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
