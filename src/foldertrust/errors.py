"""Errors that end a foldertrust operation.

Each carries the process exit code the CLI should use.
"""

from __future__ import annotations


class FatalError(Exception):
    """An unrecoverable condition that must be surfaced to the user."""

    exit_code: int = 1

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class FatalConfigError(FatalError):
    """A configuration file is present but cannot be trusted to mean anything.

    Attributes
    ----------
    config_path:
        The file that caused the error, if a single one is to blame.
    """

    exit_code = 3

    def __init__(self, message: str, config_path: str | None = None) -> None:
        super().__init__(message)
        self.config_path = config_path
