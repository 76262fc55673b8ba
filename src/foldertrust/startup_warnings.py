"""One-shot warnings handed from one run to the next.

Anything that wants the next session to show a note appends a line to a
file in the temp directory. The next startup reads the lines and deletes
the file. Filesystem trouble is reported as another warning, never raised.
"""

from __future__ import annotations

import logging
import pathlib
import tempfile

logger = logging.getLogger("foldertrust.startup_warnings")

WARNINGS_FILE_PATH = pathlib.Path(tempfile.gettempdir()) / "foldertrust-warnings.txt"

DELETE_FAILED_WARNING = "Warning: Could not delete temporary warnings file."


def add_startup_warning(message: str, path: pathlib.Path = WARNINGS_FILE_PATH) -> None:
    """Queue *message* for the next ``get_startup_warnings`` call."""
    with open(path, "a", encoding="utf-8") as f:
        f.write(message.rstrip("\n") + "\n")


def get_startup_warnings(path: pathlib.Path = WARNINGS_FILE_PATH) -> list[str]:
    """Return queued warnings and remove the file."""
    try:
        if not path.exists():
            return []
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.debug("Reading %s failed", path, exc_info=True)
        return [f"Error checking/reading warnings file: {exc}"]

    warnings = [line for line in content.splitlines() if line.strip()]
    try:
        path.unlink()
    except OSError:
        logger.debug("Deleting %s failed", path, exc_info=True)
        warnings.append(DELETE_FAILED_WARNING)
    return warnings
