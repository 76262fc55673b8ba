"""User-level trusted folders file.

The file is a flat JSON object mapping folder paths to trust levels::

    {
      "/home/me/projects": "TRUST_FOLDER",
      "/home/me/projects/vendor": "DO_NOT_TRUST"
    }

Loading never raises for bad content; problems come back as a
``RuleLoadError`` next to whatever rules could be used.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import pathlib
from typing import TYPE_CHECKING

import foldertrust.config
from foldertrust.errors import FatalConfigError
from foldertrust.trust.levels import RuleLoadError, TrustLevel, TrustRule

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

logger = logging.getLogger("foldertrust.trust.store")

TRUSTED_FOLDERS_FILENAME = "trusted_folders.json"
TRUSTED_FOLDERS_PATH_ENV = "FOLDERTRUST_TRUSTED_FOLDERS_PATH"


def trusted_folders_path() -> pathlib.Path:
    """Return the canonical user rule file.

    ``$FOLDERTRUST_TRUSTED_FOLDERS_PATH`` takes precedence over
    ``~/.config/foldertrust/trusted_folders.json``.
    """
    override = os.environ.get(TRUSTED_FOLDERS_PATH_ENV)
    if override:
        return pathlib.Path(override).expanduser()
    return foldertrust.config.user_config_dir() / TRUSTED_FOLDERS_FILENAME


@dataclasses.dataclass
class RuleFileLoad:
    rules: dict[str, TrustLevel] = dataclasses.field(default_factory=dict)
    error: RuleLoadError | None = None


def load_rule_file(path: pathlib.Path) -> RuleFileLoad:
    """Read *path* into a path → level mapping.

    A missing file is simply empty. Unreadable or malformed content
    yields an empty mapping plus a ``RuleLoadError``. Entries whose level
    is not recognised are dropped and reported, the rest are kept.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return RuleFileLoad()
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Could not load trusted folders from %s: %s", path, exc)
        return RuleFileLoad(error=RuleLoadError(str(path), str(exc)))

    if not isinstance(raw, dict):
        message = (
            "Trusted folders file must contain a JSON object, "
            f"got {type(raw).__name__}"
        )
        logger.warning("%s: %s", path, message)
        return RuleFileLoad(error=RuleLoadError(str(path), message))

    rules: dict[str, TrustLevel] = {}
    error: RuleLoadError | None = None
    for folder, value in raw.items():
        try:
            rules[folder] = TrustLevel.parse(value)
        except ValueError as exc:
            logger.warning("Skipping rule for %s in %s: %s", folder, path, exc)
            if error is None:
                error = RuleLoadError(str(path), f"{folder}: {exc}")
    return RuleFileLoad(rules=rules, error=error)


def save_rule_file(path: pathlib.Path, rules: Mapping[str, TrustLevel]) -> None:
    """Write *rules* to *path* as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {folder: TrustLevel(level).value for folder, level in rules.items()}
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    logger.debug("Saved %d trusted folder rule(s) to %s", len(data), path)


class TrustRuleStore:
    """One rule source: its file and the mapping loaded from it."""

    def __init__(
        self,
        path: pathlib.Path,
        config: dict[str, TrustLevel] | None = None,
        load_error: RuleLoadError | None = None,
    ) -> None:
        self.path = path
        self.config: dict[str, TrustLevel] = dict(config or {})
        # Set when the file could not be read in full; saving would drop rules.
        self.load_error = load_error

    @classmethod
    def load(cls, path: pathlib.Path) -> tuple[TrustRuleStore, RuleLoadError | None]:
        result = load_rule_file(path)
        return cls(path, result.rules, result.error), result.error

    def rules(self) -> Iterator[TrustRule]:
        for folder, level in self.config.items():
            yield TrustRule(folder, level, source=str(self.path))

    def set_value(self, path: str, level: TrustLevel) -> None:
        """Record *level* for *path* and write the whole mapping back.

        Refuses with ``FatalConfigError`` when the file failed to load, since
        writing the partial mapping would silently discard the user's rules.
        """
        if self.load_error is not None:
            raise FatalConfigError(
                f"Refusing to modify {self.path}: {self.load_error.message}\n"
                "Please fix the file or delete it to start over.",
                config_path=str(self.path),
            )
        self.config[path] = TrustLevel.parse(level)
        self.save()

    def save(self) -> None:
        save_rule_file(self.path, self.config)

    def __repr__(self) -> str:
        return f"TrustRuleStore({str(self.path)!r}, {len(self.config)} rules)"
