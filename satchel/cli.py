"""satchel.cli

Command-line entrypoint for satchel: a small, ordered list of files kept per project root
and git branch.

Entry points
- `satchel.cli:main`
- `python3 -m satchel ...` (delegates to this module)

Commands
- `place PATH`: add the absolute form of PATH to the end of the current satchel (no-op when
  already present).
- `pick [SELECTION]`: choose an entry and open it.
- `lucky` / `feeling-lucky`: open the front entry without asking.
- `burn`: delete the satchel of the current scope.
- `drop [SELECTION]`: remove an entry.
- `promote [SELECTION]` / `demote [SELECTION]`: move an entry to the front / back.
- `set-default-directory [PATH | --project-root]`: use PATH instead of the git project root
  for scoping (persisted in `config.json`); `--project-root` clears the override.
- `list`: print the entries, front first.
- `scope`: print the resolved scope key and the file that backs it.

Global flags
- `--root DIR`: project root for this call (beats the configured default directory).
- `--branch NAME`: branch name for this call (skips `git rev-parse`).
- `--storage-dir DIR`: directory holding the satchel files (beats `$SATCHEL_DIR`).

Selections
SELECTION is a 1-based index into the listing or an entry path (exact, or resolved against the
current directory). Without one, entries are listed on stderr in stored order and read from
stdin; an empty answer selects the front entry.

Opening files
`pick` and `lucky` run `$VISUAL` (or `$EDITOR`) with the chosen path. With `--print`, or when
neither variable is set, the path is written to stdout instead so shells can use
`vim "$(satchel pick --print)"`.

Output and exit status
- Status lines go to stderr, prefixed with `[satchel]`; paths and keys go to stdout.
- 0 on success, 1 for `EmptySatchel` / `CorruptStore` (message on stderr), 2 for usage
  errors and unknown selections. Git failures propagate as uncaught exceptions.
"""

from __future__ import annotations

import argparse
import os
import shlex
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from . import entries
from .config import SatchelConfig, load_config, save_default_directory
from .errors import SatchelError
from .git_ops import GitClient
from .store import SatchelStore, resolve_scope


def _log(msg: str) -> None:
    print(f"[satchel] {msg}", file=sys.stderr)


@dataclass(frozen=True)
class Scope:
    root: Path
    branch: str
    key: str


def resolve_root(cfg: SatchelConfig, *, root_arg: str | None, git: GitClient) -> Path:
    if root_arg:
        return Path(root_arg).expanduser().resolve()
    if cfg.default_directory is not None:
        return cfg.default_directory
    return git.project_root()


def resolve_current_scope(
    cfg: SatchelConfig, *, root_arg: str | None, branch_arg: str | None, git: GitClient
) -> Scope:
    root = resolve_root(cfg, root_arg=root_arg, git=git)
    branch = branch_arg or git.current_branch(root)
    return Scope(root=root, branch=branch, key=resolve_scope(root, branch))


def match_selection(satchel: Sequence[str], selection: str) -> str | None:
    if selection.isdecimal():
        idx = int(selection)
        if 1 <= idx <= len(satchel):
            return satchel[idx - 1]
        return None
    if selection in satchel:
        return selection
    resolved = str(Path(selection).expanduser().resolve())
    if resolved in satchel:
        return resolved
    return None


def prompt_selection(satchel: Sequence[str], *, action: str) -> str | None:
    # Stored order is the display order; never sort here.
    for i, e in enumerate(satchel, start=1):
        print(f"{i:>3}  {e}", file=sys.stderr)
    print(f"{action} which entry? [1] ", end="", file=sys.stderr, flush=True)
    try:
        answer = input().strip()
    except EOFError:
        return None
    if not answer:
        return satchel[0]
    return match_selection(satchel, answer)


def _choose(satchel: Sequence[str], selection: str | None, *, action: str) -> str | None:
    if selection is None:
        return prompt_selection(satchel, action=action)
    return match_selection(satchel, selection)


def _editor_argv() -> list[str] | None:
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if not editor:
        return None
    return shlex.split(editor)


def open_entry(path: str, *, print_only: bool) -> int:
    editor = None if print_only else _editor_argv()
    if editor is None:
        print(path)
        return 0
    return subprocess.run([*editor, path], check=False).returncode


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="satchel", description="Keep a small ordered list of files per project and branch.")
    p.add_argument("--root", default=None, help="Project root for this call (default: configured directory or git toplevel).")
    p.add_argument("--branch", default=None, help="Branch name for this call (default: current git branch).")
    p.add_argument("--storage-dir", default=None, help="Directory holding satchel files (default: $SATCHEL_DIR or ~/.satchel).")
    sub = p.add_subparsers(dest="command", required=True, metavar="COMMAND")

    place = sub.add_parser("place", help="Add a file to the end of the satchel.")
    place.add_argument("path", help="File to place; stored as an absolute path.")

    for name, aliases, help_text in [
        ("pick", [], "Choose an entry and open it."),
        ("lucky", ["feeling-lucky"], "Open the front entry."),
    ]:
        sp = sub.add_parser(name, aliases=aliases, help=help_text)
        if name == "pick":
            sp.add_argument("selection", nargs="?", default=None, help="1-based index or entry path.")
        sp.add_argument("--print", dest="print_only", action="store_true", help="Print the path instead of opening it.")

    sub.add_parser("burn", help="Delete the satchel of the current scope.")

    for name, help_text in [
        ("drop", "Remove an entry."),
        ("promote", "Move an entry to the front."),
        ("demote", "Move an entry to the back."),
    ]:
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("selection", nargs="?", default=None, help="1-based index or entry path.")

    sdd = sub.add_parser("set-default-directory", help="Scope satchels to a fixed directory instead of the project root.")
    group = sdd.add_mutually_exclusive_group(required=True)
    group.add_argument("path", nargs="?", default=None, help="Directory to use as the project root.")
    group.add_argument("--project-root", action="store_true", help="Clear the override and use the git project root again.")

    sub.add_parser("list", help="Print the entries, front first.")
    sub.add_parser("scope", help="Print the scope key and backing file.")
    return p


def _cmd_place(store: SatchelStore, scope: Scope, args: argparse.Namespace) -> int:
    entry = str(Path(args.path).expanduser().resolve())
    current = store.load(scope.key)
    updated = entries.add(current, entry)
    if updated == current:
        _log(f"already in satchel: {entry}")
        return 0
    store.save(scope.key, updated)
    _log(f"placed {entry}")
    return 0


def _cmd_pick(store: SatchelStore, scope: Scope, args: argparse.Namespace) -> int:
    current = entries.require_entries(store.load(scope.key), scope_key=scope.key)
    chosen = _choose(current, args.selection, action="Pick")
    if chosen is None:
        return _no_such_entry(args.selection)
    return open_entry(chosen, print_only=args.print_only)


def _cmd_lucky(store: SatchelStore, scope: Scope, args: argparse.Namespace) -> int:
    current = entries.require_entries(store.load(scope.key), scope_key=scope.key)
    front = entries.pick_default(current)
    assert front is not None
    return open_entry(front, print_only=args.print_only)


def _cmd_burn(store: SatchelStore, scope: Scope, args: argparse.Namespace) -> int:
    store.burn(scope.key)
    _log(f"burned satchel for {scope.root} on {scope.branch}")
    return 0


def _reorder(
    op: Callable[[Sequence[str], str], list[str]], action: str, done: str
) -> Callable[[SatchelStore, Scope, argparse.Namespace], int]:
    def run(store: SatchelStore, scope: Scope, args: argparse.Namespace) -> int:
        current = entries.require_entries(store.load(scope.key), scope_key=scope.key)
        chosen = _choose(current, args.selection, action=action)
        if chosen is None:
            return _no_such_entry(args.selection)
        store.save(scope.key, op(current, chosen))
        _log(f"{done} {chosen}")
        return 0

    return run


def _cmd_list(store: SatchelStore, scope: Scope, args: argparse.Namespace) -> int:
    for e in store.load(scope.key):
        print(e)
    return 0


def _cmd_scope(store: SatchelStore, scope: Scope, args: argparse.Namespace) -> int:
    print(scope.key)
    print(store.path_for(scope.key))
    return 0


def _no_such_entry(selection: str | None) -> int:
    if selection is None:
        _log("no entry selected")
    else:
        _log(f"no such entry: {selection}")
    return 2


_COMMANDS: dict[str, Callable[[SatchelStore, Scope, argparse.Namespace], int]] = {
    "place": _cmd_place,
    "pick": _cmd_pick,
    "lucky": _cmd_lucky,
    "feeling-lucky": _cmd_lucky,
    "burn": _cmd_burn,
    "drop": _reorder(entries.remove, "Drop", "dropped"),
    "promote": _reorder(entries.promote, "Promote", "promoted"),
    "demote": _reorder(entries.demote, "Demote", "demoted"),
    "list": _cmd_list,
    "scope": _cmd_scope,
}


def _set_default_directory(cfg: SatchelConfig, args: argparse.Namespace) -> int:
    if args.project_root:
        save_default_directory(cfg.storage_dir, None)
        _log("default directory cleared; using the project root")
        return 0
    directory = Path(args.path).expanduser().resolve()
    if not directory.is_dir():
        _log(f"not a directory: {directory}")
        return 2
    save_default_directory(cfg.storage_dir, directory)
    _log(f"default directory set to {directory}")
    return 0


def main(argv: list[str] | None = None) -> int:
    raw_argv = list(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(raw_argv)

    storage_dir = Path(args.storage_dir).expanduser() if args.storage_dir else None
    try:
        cfg = load_config(storage_dir=storage_dir)
        if args.command == "set-default-directory":
            return _set_default_directory(cfg, args)

        git = GitClient(cwd=Path.cwd().resolve())
        scope = resolve_current_scope(cfg, root_arg=args.root, branch_arg=args.branch, git=git)
        store = SatchelStore(storage_dir=cfg.storage_dir)
        return _COMMANDS[args.command](store, scope, args)
    except SatchelError as e:
        _log(str(e))
        return 1
