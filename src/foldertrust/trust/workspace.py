"""Decide whether the current workspace is trusted.

Checks run in order and the first one that decides wins:

1. Folder trust disabled in settings: trusted, no source.
2. The IDE reports a trust state: that state, source ``"ide"``.
3. The trusted folders file: its verdict for the workspace directory,
   source ``"file"``. ``is_trusted`` is ``None`` when no rule applies;
   callers should ask the user rather than pick a default.

A rule file that fails to load is fatal here.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import pathlib
from typing import TYPE_CHECKING, Literal

from foldertrust.errors import FatalConfigError
from foldertrust.ide.context import ide_context_store
from foldertrust.trust.aggregate import load_trusted_folders

if TYPE_CHECKING:
    from foldertrust.ide.context import TrustOverrideProvider
    from foldertrust.trust.config import FolderTrustConfig

logger = logging.getLogger("foldertrust.trust.workspace")

TrustSource = Literal["ide", "file"]

TRUST_SOURCE_IDE: TrustSource = "ide"
TRUST_SOURCE_FILE: TrustSource = "file"


@dataclasses.dataclass(frozen=True)
class TrustResult:
    is_trusted: bool | None
    source: TrustSource | None


def is_folder_trust_enabled(settings: FolderTrustConfig | None) -> bool:
    return bool(settings is not None and settings.enabled)


def _trust_from_file(cwd: str | os.PathLike[str]) -> bool | None:
    folders = load_trusted_folders()
    if folders.errors:
        details = "\n".join(f"  {e.path}: {e.message}" for e in folders.errors)
        raise FatalConfigError(
            "Found an invalid trusted folders configuration:\n"
            f"{details}\n"
            "Please fix the file or delete it to start over.",
            config_path=folders.errors[0].path,
        )
    return folders.is_path_trusted(cwd, cwd).as_bool()


def is_workspace_trusted(
    settings: FolderTrustConfig | None,
    *,
    ide: TrustOverrideProvider | None = None,
    cwd: str | os.PathLike[str] | None = None,
) -> TrustResult:
    """Return the trust decision for *cwd* (default: the process cwd)."""
    if not is_folder_trust_enabled(settings):
        return TrustResult(is_trusted=True, source=None)

    override = (ide if ide is not None else ide_context_store).workspace_trust()
    if override is not None:
        logger.debug("Workspace trust set by IDE: %s", override)
        return TrustResult(is_trusted=override, source=TRUST_SOURCE_IDE)

    if cwd is None:
        cwd = pathlib.Path.cwd()
    return TrustResult(is_trusted=_trust_from_file(cwd), source=TRUST_SOURCE_FILE)
