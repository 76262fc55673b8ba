"""Layered TOML configuration for foldertrust.

Sections are plain dataclasses registered with ``@configurable``. A
section is populated from code defaults, then the user-wide TOML file,
then the project TOML file (unless the caller asks for user scope only).

Config files:
    ~/.config/foldertrust/config.toml     global (user-wide)
    .foldertrust/config.toml              local  (project-specific)
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
import tomllib
from typing import Any, TypeVar

T = TypeVar("T")

logger = logging.getLogger("foldertrust.config")

APP_DIR_NAME = "foldertrust"

_SECTIONS: dict[str, type] = {}


def configurable(section: str):
    """Class decorator that registers a dataclass under *section*."""

    def decorator(cls: type[T]) -> type[T]:
        _SECTIONS[section] = cls
        return cls

    return decorator


def user_config_dir() -> pathlib.Path:
    """Return ``~/.config/foldertrust``."""
    return pathlib.Path.home() / ".config" / APP_DIR_NAME


def _global_path() -> pathlib.Path:
    return user_config_dir() / "config.toml"


def _local_path(root: pathlib.Path) -> pathlib.Path:
    return root / f".{APP_DIR_NAME}" / "config.toml"


def find_project_root(start: pathlib.Path) -> pathlib.Path | None:
    """Walk up from *start* to the nearest directory holding ``.git``
    or ``.foldertrust``. Returns ``None`` when neither is found."""
    current = start.resolve()
    while True:
        if (current / ".git").is_dir() or (current / f".{APP_DIR_NAME}").is_dir():
            return current
        if current.parent == current:
            return None
        current = current.parent


def _resolve_root(root: pathlib.Path | None) -> pathlib.Path:
    if root is not None:
        return root
    cwd = pathlib.Path.cwd()
    found = find_project_root(cwd)
    return found if found is not None else cwd


def _read_toml(path: pathlib.Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def _write_toml(path: pathlib.Path, data: dict[str, Any]) -> None:
    import tomli_w

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(tomli_w.dumps(data).encode())


def _coerce(value: str, target_type: type) -> Any:
    """Turn a command-line string into *target_type*."""
    if target_type is bool:
        return value.strip().lower() in ("true", "1", "yes", "on")
    if target_type is int:
        return int(value)
    if target_type is float:
        return float(value)
    return value


def _field_type(cls: type, name: str) -> type:
    for f in dataclasses.fields(cls):
        if f.name != name:
            continue
        # Annotations are strings under ``from __future__ import annotations``.
        if isinstance(f.type, str):
            return {"bool": bool, "int": int, "float": float}.get(f.type, str)
        return f.type
    raise KeyError(name)


def _section_class(section: str) -> type:
    cls = _SECTIONS.get(section)
    if cls is None:
        raise KeyError(f"Unknown config section: {section}")
    return cls


def _scope_path(scope: str, root: pathlib.Path | None) -> pathlib.Path:
    if scope == "global":
        return _global_path()
    if scope == "local":
        return _local_path(_resolve_root(root))
    raise ValueError(f"Unknown config scope: {scope!r} (expected 'global' or 'local')")


def list_sections() -> dict[str, type]:
    """Return a snapshot of the registered sections."""
    return dict(_SECTIONS)


def load(
    section: str,
    root: pathlib.Path | None = None,
    *,
    include_local: bool = True,
) -> Any:
    """Build the effective *section* instance.

    Values from the global file override the defaults; values from the
    project file override both unless *include_local* is false.
    """
    cls = _section_class(section)

    merged: dict[str, Any] = dict(_read_toml(_global_path()).get(section, {}))
    if include_local:
        merged.update(_read_toml(_local_path(_resolve_root(root))).get(section, {}))

    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(merged) - known)
    if unknown:
        logger.debug("Ignoring unknown keys in [%s]: %s", section, ", ".join(unknown))
    return cls(**{k: v for k, v in merged.items() if k in known})


def get_effective(
    section: str,
    key: str,
    root: pathlib.Path | None = None,
) -> Any:
    """Return the effective value of ``section.key``."""
    return getattr(load(section, root), key)


def set_value(
    section: str,
    key: str,
    value: Any,
    *,
    scope: str = "local",
    root: pathlib.Path | None = None,
) -> pathlib.Path:
    """Persist ``section.key = value`` in the *scope* file and return its path."""
    cls = _section_class(section)
    if key not in {f.name for f in dataclasses.fields(cls)}:
        raise KeyError(f"Unknown key: {section}.{key}")

    if isinstance(value, str):
        value = _coerce(value, _field_type(cls, key))

    path = _scope_path(scope, root)
    data = _read_toml(path)
    data.setdefault(section, {})[key] = value
    _write_toml(path, data)
    return path


def reset_value(
    section: str,
    key: str,
    *,
    scope: str = "local",
    root: pathlib.Path | None = None,
) -> bool:
    """Drop an override. Returns whether anything was removed."""
    path = _scope_path(scope, root)
    data = _read_toml(path)
    values = data.get(section, {})
    if key not in values:
        return False
    del values[key]
    if not values:
        del data[section]
    _write_toml(path, data)
    return True
