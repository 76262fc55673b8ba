"""CLI for trusted folder rules.

Usage:
    foldertrust trust check [PATH]              Resolve PATH (default: cwd)
    foldertrust trust add PATH [--level LEVEL]  Record a rule in the user file
    foldertrust trust list                      Show rules in resolution order
    foldertrust trust path                      Print the user rule file path
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from foldertrust.trust import aggregate, resolver, store
from foldertrust.trust.levels import TrustLevel, TrustVerdict

_EXIT_CODES = {
    TrustVerdict.TRUSTED: 0,
    TrustVerdict.UNTRUSTED: 1,
    TrustVerdict.UNKNOWN: 2,
}


def _print_errors(folders: aggregate.TrustedFolders) -> None:
    for error in folders.errors:
        print(f"warning: {error.path}: {error.message}", file=sys.stderr)


def cmd_check(path: str | None, *, cwd: Path) -> int:
    """Print the verdict for *path* and the rule that produced it."""
    folders = aggregate.load_trusted_folders()
    _print_errors(folders)
    target = path if path is not None else str(cwd)
    verdict = folders.is_path_trusted(target, cwd)
    rule = folders.find_rule(target, cwd)
    if rule is None:
        print(f"{verdict.value}: no rule covers {resolver.normalize_path(target, cwd)}")
    else:
        print(f"{verdict.value}: {rule.path} ({rule.trust_level})")
    return _EXIT_CODES[verdict]


def cmd_add(path: str, level: str, *, cwd: Path) -> int:
    """Store *level* for *path*, anchored at *cwd* when relative."""
    try:
        trust_level = TrustLevel.parse(level)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    folders = aggregate.load_trusted_folders()
    if folders.errors:
        _print_errors(folders)
        print(
            f"error: refusing to modify {folders.user.path}; "
            "fix or delete it first",
            file=sys.stderr,
        )
        return 3
    folder = resolver.normalize_path(path, cwd)
    folders.set_value(folder, trust_level)
    print(f"{folder} = {trust_level} ({folders.user.path})")
    return 0


def cmd_list() -> int:
    """Print every rule in the order resolution considers them."""
    folders = aggregate.load_trusted_folders()
    _print_errors(folders)
    rules = folders.rules
    if not rules:
        print("No trusted folder rules.")
        return 0
    width = max(len(rule.path) for rule in rules)
    show_source = len(folders.stores) > 1
    level_width = max(len(rule.trust_level) for rule in rules)
    for rule in rules:
        line = f"{rule.path:<{width}}  {rule.trust_level}"
        if show_source:
            line = f"{line:<{width + 2 + level_width}}  {rule.source}"
        print(line)
    return 0


def cmd_path() -> int:
    print(store.trusted_folders_path())
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``foldertrust trust``."""
    parser = argparse.ArgumentParser(
        prog="foldertrust trust",
        description="Inspect and edit trusted folder rules.",
    )
    sub = parser.add_subparsers(dest="subcmd")

    p_check = sub.add_parser("check", help="Resolve a path against the rules")
    p_check.add_argument("target", nargs="?", default=None, help="Path (default: cwd)")
    p_check.add_argument("--cwd", type=Path, default=Path.cwd())

    p_add = sub.add_parser("add", help="Record a rule for a folder")
    p_add.add_argument("target", help="Folder path")
    p_add.add_argument(
        "--level",
        default=TrustLevel.TRUST_FOLDER.value,
        help=f"One of {', '.join(level.value for level in TrustLevel)}",
    )
    p_add.add_argument("--cwd", type=Path, default=Path.cwd())

    sub.add_parser("list", help="Show all rules")
    sub.add_parser("path", help="Print the user rule file path")

    args = parser.parse_args(argv)

    if args.subcmd is None:
        parser.print_help()
        return 1

    if args.subcmd == "check":
        return cmd_check(args.target, cwd=args.cwd)
    elif args.subcmd == "add":
        return cmd_add(args.target, args.level, cwd=args.cwd)
    elif args.subcmd == "list":
        return cmd_list()
    elif args.subcmd == "path":
        return cmd_path()
    else:
        parser.print_help()
        return 1
