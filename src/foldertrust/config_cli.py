"""CLI for foldertrust configuration.

Usage:
    foldertrust config list                         Show sections and defaults
    foldertrust config get <section.key>            Print the effective value
    foldertrust config set [--global] <key> <value> Write a value
    foldertrust config reset [--global] <key>       Remove an override
    foldertrust config show                         Dump every effective section
    foldertrust config edit [--global]              Open config.toml in $EDITOR
"""

from __future__ import annotations

import argparse
import dataclasses
import os
import subprocess
import sys
from pathlib import Path

import foldertrust.config


def _register_sections() -> None:
    import foldertrust.trust.config  # noqa: F401


def _split_key(key: str) -> tuple[str, str] | None:
    section, sep, field = key.partition(".")
    if not sep or not section or not field:
        print(f"Invalid key format: {key!r} (expected section.key)", file=sys.stderr)
        return None
    return section, field


def _scope(global_flag: bool) -> str:
    return "global" if global_flag else "local"


def cmd_list() -> int:
    _register_sections()
    sections = foldertrust.config.list_sections()
    if not sections:
        print("No configurable sections registered.")
        return 0
    for name, cls in sorted(sections.items()):
        print(f"[{name}]")
        for f in dataclasses.fields(cls):
            type_name = f.type if isinstance(f.type, str) else f.type.__name__
            print(f"  {f.name}: {type_name} = {f.default!r}")
        print()
    return 0


def cmd_get(key: str, root: Path) -> int:
    _register_sections()
    parts = _split_key(key)
    if parts is None:
        return 1
    try:
        value = foldertrust.config.get_effective(*parts, root=root)
    except (KeyError, AttributeError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(value)
    return 0


def cmd_set(key: str, value: str, *, global_flag: bool, root: Path) -> int:
    _register_sections()
    parts = _split_key(key)
    if parts is None:
        return 1
    scope = _scope(global_flag)
    try:
        path = foldertrust.config.set_value(*parts, value, scope=scope, root=root)
    except (KeyError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Set {key} = {value} ({scope}: {path})")
    if parts[0] == "folder_trust" and scope == "local":
        print(
            "note: folder_trust is only read from the global file; "
            "use --global for it to take effect",
            file=sys.stderr,
        )
    return 0


def cmd_reset(key: str, *, global_flag: bool, root: Path) -> int:
    _register_sections()
    parts = _split_key(key)
    if parts is None:
        return 1
    scope = _scope(global_flag)
    if foldertrust.config.reset_value(*parts, scope=scope, root=root):
        print(f"Reset {key} ({scope})")
    else:
        print(f"{key} was not set ({scope})")
    return 0


def cmd_show(root: Path) -> int:
    _register_sections()
    for name in sorted(foldertrust.config.list_sections()):
        instance = foldertrust.config.load(name, root)
        print(f"[{name}]")
        for f in dataclasses.fields(instance):
            print(f"  {f.name} = {getattr(instance, f.name)!r}")
        print()
    return 0


def cmd_edit(*, global_flag: bool, root: Path) -> int:
    if global_flag:
        path = foldertrust.config._global_path()
    else:
        path = foldertrust.config._local_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text("# foldertrust configuration\n# See: foldertrust config list\n")
    editor = os.environ.get("EDITOR", "vi")
    return subprocess.call([editor, str(path)])


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``foldertrust config``."""
    rooted = argparse.ArgumentParser(add_help=False)
    rooted.add_argument("--path", type=Path, default=Path.cwd(), help="Project root")
    scoped = argparse.ArgumentParser(add_help=False, parents=[rooted])
    scoped.add_argument("--global", dest="global_flag", action="store_true")

    parser = argparse.ArgumentParser(
        prog="foldertrust config",
        description="foldertrust configuration.",
    )
    sub = parser.add_subparsers(dest="subcmd")
    sub.add_parser("list", help="Show all configurable sections")
    sub.add_parser("get", parents=[rooted], help="Print effective value").add_argument(
        "key", help="section.key"
    )
    p_set = sub.add_parser("set", parents=[scoped], help="Set a config value")
    p_set.add_argument("key", help="section.key")
    p_set.add_argument("value", help="New value")
    sub.add_parser("reset", parents=[scoped], help="Remove an override").add_argument(
        "key", help="section.key"
    )
    sub.add_parser("show", parents=[rooted], help="Dump full effective config")
    sub.add_parser("edit", parents=[scoped], help="Open config.toml in $EDITOR")

    args = parser.parse_args(argv)

    if args.subcmd == "list":
        return cmd_list()
    elif args.subcmd == "get":
        return cmd_get(args.key, args.path)
    elif args.subcmd == "set":
        return cmd_set(args.key, args.value, global_flag=args.global_flag, root=args.path)
    elif args.subcmd == "reset":
        return cmd_reset(args.key, global_flag=args.global_flag, root=args.path)
    elif args.subcmd == "show":
        return cmd_show(args.path)
    elif args.subcmd == "edit":
        return cmd_edit(global_flag=args.global_flag, root=args.path)
    parser.print_help()
    return 1
