"""Tests for the SessionStart hook module."""

from __future__ import annotations

import json
import pathlib
import unittest.mock

import pytest

import foldertrust.config
import foldertrust.hooks.session_start
from foldertrust.ide.context import ide_context_store


@pytest.fixture(autouse=True)
def no_startup_warnings():
    with unittest.mock.patch(
        "foldertrust.startup_warnings.get_startup_warnings", return_value=[]
    ) as patched:
        yield patched


@pytest.fixture
def enabled() -> None:
    foldertrust.config.set_value("folder_trust", "enabled", True, scope="global")


def _context(hook_input: dict) -> str:
    result = json.loads(foldertrust.hooks.session_start.main(hook_input))
    assert result["hookSpecificOutput"]["hookEventName"] == "SessionStart"
    return result["hookSpecificOutput"]["additionalContext"]


class TestSessionStartHook:
    def test_disabled_by_default(self, tmp_path: pathlib.Path) -> None:
        assert "Disabled" in _context({"cwd": str(tmp_path)})

    def test_trusted_folder(
        self, tmp_path: pathlib.Path, enabled: None, write_trusted_folders
    ) -> None:
        write_trusted_folders({str(tmp_path): "TRUST_FOLDER"})
        ctx = _context({"cwd": str(tmp_path / "src")})
        assert "is trusted (via trusted folders file)" in ctx

    def test_untrusted_folder(
        self, tmp_path: pathlib.Path, enabled: None, write_trusted_folders
    ) -> None:
        write_trusted_folders({str(tmp_path): "DO_NOT_TRUST"})
        assert "is NOT trusted" in _context({"cwd": str(tmp_path)})

    def test_unknown_folder(self, tmp_path: pathlib.Path, enabled: None) -> None:
        assert "No rule covers" in _context({"cwd": str(tmp_path)})

    def test_ide_context_from_input(
        self, tmp_path: pathlib.Path, enabled: None, write_trusted_folders
    ) -> None:
        write_trusted_folders({str(tmp_path): "TRUST_FOLDER"})
        ctx = _context(
            {"cwd": str(tmp_path), "ide": {"workspaceState": {"isTrusted": False}}}
        )
        assert "is NOT trusted (via IDE)" in ctx
        assert ide_context_store.workspace_trust() is False

    def test_config_error_reported_not_raised(
        self, tmp_path: pathlib.Path, enabled: None, write_trusted_folders
    ) -> None:
        write_trusted_folders("not json")
        assert "Configuration error" in _context({"cwd": str(tmp_path)})

    def test_includes_startup_warnings(
        self, tmp_path: pathlib.Path, no_startup_warnings: unittest.mock.MagicMock
    ) -> None:
        no_startup_warnings.return_value = ["Disk almost full"]
        assert "[Startup Warning] Disk almost full" in _context({"cwd": str(tmp_path)})

    def test_empty_input_does_not_crash(self) -> None:
        assert _context({})
