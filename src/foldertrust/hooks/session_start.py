"""SessionStart hook — folder trust status and queued startup warnings.

Reads the hook JSON, takes any IDE context it carries, decides whether
the session's directory is trusted, and returns additionalContext.
"""

from __future__ import annotations

import json
import logging
import pathlib

import foldertrust.startup_warnings
from foldertrust.errors import FatalConfigError
from foldertrust.ide.context import IdeContext, ide_context_store
from foldertrust.trust.config import load_settings
from foldertrust.trust.workspace import TrustResult, is_workspace_trusted

logger = logging.getLogger("foldertrust.hooks.session_start")


def _describe(result: TrustResult, cwd: pathlib.Path) -> str:
    if result.source is None:
        return "[Folder Trust] Disabled; all folders are treated as trusted."
    via = "IDE" if result.source == "ide" else "trusted folders file"
    if result.is_trusted is None:
        return (
            f"[Folder Trust] No rule covers {cwd}. Ask the user whether to "
            "trust this folder before running tools or loading project config."
        )
    if result.is_trusted:
        return f"[Folder Trust] {cwd} is trusted (via {via})."
    return (
        f"[Folder Trust] {cwd} is NOT trusted (via {via}). Do not run tools "
        "or load project configuration from this folder."
    )


def main(hook_input: dict) -> str:
    """Run the SessionStart hook. Returns the JSON output string."""
    cwd_str = hook_input.get("cwd")
    cwd = pathlib.Path(cwd_str) if cwd_str else pathlib.Path.cwd()

    ide_data = hook_input.get("ide")
    if isinstance(ide_data, dict):
        ide_context_store.set(IdeContext.from_dict(ide_data))

    parts: list[str] = []
    try:
        result = is_workspace_trusted(load_settings(cwd), cwd=cwd)
        parts.append(_describe(result, cwd))
    except FatalConfigError as exc:
        logger.error("Folder trust check failed: %s", exc.message)
        parts.append(f"[Folder Trust] Configuration error: {exc.message}")

    for warning in foldertrust.startup_warnings.get_startup_warnings():
        parts.append(f"[Startup Warning] {warning}")

    output = {
        "hookSpecificOutput": {
            "hookEventName": "SessionStart",
            "additionalContext": "\n\n".join(parts),
        }
    }
    return json.dumps(output)
