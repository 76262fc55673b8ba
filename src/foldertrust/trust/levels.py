"""Trust levels, rules, and verdicts."""

from __future__ import annotations

import dataclasses
import enum


class TrustLevel(enum.StrEnum):
    """Level a user assigned to a folder (stored as these tokens on disk)."""

    TRUST_FOLDER = "TRUST_FOLDER"
    TRUST_PARENT = "TRUST_PARENT"
    DO_NOT_TRUST = "DO_NOT_TRUST"

    @classmethod
    def parse(cls, value: object) -> TrustLevel:
        """Return the level named by *value*, ignoring case.

        Raises ``ValueError`` for anything that is not one of the tokens.
        """
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        choices = ", ".join(level.value for level in cls)
        raise ValueError(f"Invalid trust level {value!r} (expected one of {choices})")

    @property
    def grants_trust(self) -> bool:
        return self is not TrustLevel.DO_NOT_TRUST


@dataclasses.dataclass(frozen=True)
class TrustRule:
    path: str
    trust_level: TrustLevel
    # File the rule was loaded from; not part of rule identity.
    source: str | None = dataclasses.field(default=None, compare=False)


@dataclasses.dataclass(frozen=True)
class RuleLoadError:
    """A rule source that could not be used, and why."""

    path: str
    message: str


class TrustVerdict(enum.Enum):
    """Outcome of resolving a path against the rules.

    ``UNKNOWN`` means no rule applies. It is not the same as ``UNTRUSTED``.
    """

    TRUSTED = "trusted"
    UNTRUSTED = "untrusted"
    UNKNOWN = "unknown"

    def as_bool(self) -> bool | None:
        if self is TrustVerdict.TRUSTED:
            return True
        if self is TrustVerdict.UNTRUSTED:
            return False
        return None
