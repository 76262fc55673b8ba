"""foldertrust CLI — folder trust for coding-agent sessions.

Usage:
    foldertrust workspace          Decide whether the current folder is trusted
    foldertrust trust <cmd>        Inspect and edit trusted folder rules
    foldertrust warnings           Print (and consume) queued startup warnings
    foldertrust config <cmd>       Configuration (get/set/list/show)
    foldertrust hook <event>       Run a hook (called by the agent, not users)
"""

from __future__ import annotations

import json
import logging
import os
import pathlib
import sys

from foldertrust.errors import FatalError

_HOOK_EVENTS = {
    "SessionStart": "foldertrust.hooks.session_start",
}


def _configure_logging() -> None:
    level = logging.DEBUG if os.environ.get("FOLDERTRUST_DEBUG") else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _cmd_workspace(args: list[str]) -> int:
    """Run the full workspace decision for the current directory."""
    import foldertrust.trust.config
    import foldertrust.trust.workspace

    del args
    cwd = pathlib.Path.cwd()
    settings = foldertrust.trust.config.load_settings(cwd)
    result = foldertrust.trust.workspace.is_workspace_trusted(settings, cwd=cwd)

    if result.source is None:
        print("trusted (folder trust disabled)")
        return 0
    if result.is_trusted is None:
        print(f"unknown ({result.source})")
        return 2
    print(f"{'trusted' if result.is_trusted else 'untrusted'} ({result.source})")
    return 0 if result.is_trusted else 1


def _cmd_trust(args: list[str]) -> int:
    import foldertrust.trust_cli

    return foldertrust.trust_cli.main(args)


def _cmd_config(args: list[str]) -> int:
    import foldertrust.config_cli

    return foldertrust.config_cli.main(args)


def _cmd_warnings(args: list[str]) -> int:
    import foldertrust.startup_warnings

    del args
    for warning in foldertrust.startup_warnings.get_startup_warnings():
        print(warning)
    return 0


def _cmd_hook(args: list[str]) -> int:
    """Dispatch a hook event. Called by the agent, not users."""
    if not args:
        print("Usage: foldertrust hook <event>", file=sys.stderr)
        print(f"Events: {', '.join(_HOOK_EVENTS)}", file=sys.stderr)
        return 1

    event = args[0]
    module_name = _HOOK_EVENTS.get(event)
    if module_name is None:
        print(f"Unknown hook event: {event}", file=sys.stderr)
        return 1

    import importlib

    module = importlib.import_module(module_name)

    hook_data: dict = {}
    try:
        raw = sys.stdin.read()
        if raw:
            hook_data = json.loads(raw)
    except (json.JSONDecodeError, ValueError):
        logging.getLogger("foldertrust.hooks").warning("Ignoring malformed hook input")

    print(module.main(hook_data))
    return 0


_COMMANDS = {
    "workspace": _cmd_workspace,
    "trust": _cmd_trust,
    "config": _cmd_config,
    "warnings": _cmd_warnings,
    "hook": _cmd_hook,
}


def run(argv: list[str]) -> int:
    if not argv or argv[0] not in _COMMANDS:
        print(__doc__)
        return 1
    try:
        return _COMMANDS[argv[0]](argv[1:])
    except FatalError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return exc.exit_code


def main() -> None:
    _configure_logging()
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
