"""Merge rule sources into one ordered rule list.

Today there is a single source, the user-level file. Sources are kept in
priority order; within a source, rules keep file order. A source that
fails to load contributes no rules and one ``RuleLoadError``.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from foldertrust.trust import resolver
from foldertrust.trust.levels import RuleLoadError, TrustLevel, TrustRule, TrustVerdict
from foldertrust.trust.store import TrustRuleStore, trusted_folders_path

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("foldertrust.trust.aggregate")


class TrustedFolders:
    """Rules from every source plus the errors met while loading them.

    The first store is the user store; ``set_value`` writes there.
    """

    def __init__(
        self,
        stores: Sequence[TrustRuleStore],
        errors: Sequence[RuleLoadError] = (),
    ) -> None:
        if not stores:
            raise ValueError("TrustedFolders needs at least the user store")
        self.stores = list(stores)
        self.errors = list(errors)

    @property
    def user(self) -> TrustRuleStore:
        return self.stores[0]

    @property
    def rules(self) -> list[TrustRule]:
        # Rebuilt from the stores so writes through set_value show up at once.
        return [rule for store in self.stores for rule in store.rules()]

    def set_value(self, path: str, level: TrustLevel) -> None:
        """Trust (or distrust) *path* in the user store and persist it."""
        self.user.set_value(path, level)
        logger.info("Set %s to %s in %s", path, level, self.user.path)

    def find_rule(
        self,
        path: str | os.PathLike[str],
        cwd: str | os.PathLike[str] | None = None,
    ) -> TrustRule | None:
        return resolver.find_matching_rule(path, self.rules, cwd)

    def is_path_trusted(
        self,
        path: str | os.PathLike[str],
        cwd: str | os.PathLike[str] | None = None,
    ) -> TrustVerdict:
        return resolver.is_path_trusted(path, self.rules, cwd)


def aggregate_rule_stores(
    loaded: Sequence[tuple[TrustRuleStore, RuleLoadError | None]],
) -> TrustedFolders:
    """Build an aggregate from ``(store, error)`` pairs in priority order."""
    stores = [store for store, _ in loaded]
    errors = [error for _, error in loaded if error is not None]
    return TrustedFolders(stores, errors)


_loaded: TrustedFolders | None = None


def load_trusted_folders() -> TrustedFolders:
    """Load every rule source, once per process.

    Call ``reset_trusted_folders_for_testing`` to force a reload.
    """
    global _loaded
    if _loaded is None:
        _loaded = aggregate_rule_stores([TrustRuleStore.load(trusted_folders_path())])
        logger.debug(
            "Loaded %d trusted folder rule(s), %d error(s)",
            len(_loaded.rules),
            len(_loaded.errors),
        )
    return _loaded


def reset_trusted_folders_for_testing() -> None:
    global _loaded
    _loaded = None
