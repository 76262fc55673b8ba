"""Configuration for folder trust."""

from __future__ import annotations

import dataclasses
import pathlib

import foldertrust.config


@foldertrust.config.configurable("folder_trust")
@dataclasses.dataclass
class FolderTrustConfig:
    # Off by default: every workspace counts as trusted until enabled via
    #   foldertrust config set --global folder_trust.enabled true
    enabled: bool = False


def load_settings(root: pathlib.Path | None = None) -> FolderTrustConfig:
    """Load the ``folder_trust`` section from the user-wide file only.

    A project config must not be able to switch trust checking off for
    the project it lives in.
    """
    return foldertrust.config.load("folder_trust", root, include_local=False)
