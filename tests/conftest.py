"""Shared test fixtures for foldertrust tests."""

from __future__ import annotations

import json
import pathlib

import pytest

from foldertrust.ide.context import ide_context_store
from foldertrust.trust import aggregate, store


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    """Point HOME at a temp dir and reset process-wide trust state."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv(store.TRUSTED_FOLDERS_PATH_ENV, raising=False)
    aggregate.reset_trusted_folders_for_testing()
    ide_context_store.clear()
    yield home
    aggregate.reset_trusted_folders_for_testing()
    ide_context_store.clear()


@pytest.fixture
def write_trusted_folders():
    """Factory that writes the user trusted folders file."""

    def _write(config: dict[str, str] | str) -> pathlib.Path:
        path = store.trusted_folders_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(config, str):
            path.write_text(config)
        else:
            path.write_text(json.dumps(config))
        return path

    return _write
