"""Resolve a path against trust rules.

The rule that applies to a path is the deepest rule whose folder is the
path itself or one of its ancestors. A nested ``TRUST_FOLDER`` rule can
therefore re-trust a subtree below a ``DO_NOT_TRUST`` folder, and a
nested ``DO_NOT_TRUST`` rule can carve a hole out of a trusted one.
Matching is by whole path segments only; there are no wildcards.
"""

from __future__ import annotations

import os
import pathlib
from typing import TYPE_CHECKING

from foldertrust.trust.levels import TrustRule, TrustVerdict

if TYPE_CHECKING:
    from collections.abc import Iterable


def normalize_path(path: str | os.PathLike[str], cwd: str | os.PathLike[str]) -> str:
    """Return *path* as an absolute, normalized, case-folded string.

    Relative paths are anchored at *cwd*. Symlinks are left alone so that
    the rule file means what the user typed.
    """
    expanded = os.path.expanduser(os.fspath(path))
    joined = os.path.join(os.fspath(cwd), expanded)
    return os.path.normcase(os.path.normpath(os.path.abspath(joined)))


def _segments(normalized: str) -> tuple[str, ...]:
    return pathlib.PurePath(normalized).parts


def _contains(ancestor: tuple[str, ...], candidate: tuple[str, ...]) -> bool:
    return candidate[: len(ancestor)] == ancestor


def find_matching_rule(
    candidate: str | os.PathLike[str],
    rules: Iterable[TrustRule],
    cwd: str | os.PathLike[str] | None = None,
) -> TrustRule | None:
    """Return the most specific rule covering *candidate*, or ``None``.

    Ties between equally deep rules go to the one listed first.
    """
    if cwd is None:
        cwd = pathlib.Path.cwd()
    target = _segments(normalize_path(candidate, cwd))

    best: TrustRule | None = None
    best_depth = -1
    for rule in rules:
        folder = _segments(normalize_path(rule.path, cwd))
        if len(folder) > best_depth and _contains(folder, target):
            best, best_depth = rule, len(folder)
    return best


def is_path_trusted(
    candidate: str | os.PathLike[str],
    rules: Iterable[TrustRule],
    cwd: str | os.PathLike[str] | None = None,
) -> TrustVerdict:
    """Resolve *candidate* to trusted, untrusted, or unknown."""
    rule = find_matching_rule(candidate, rules, cwd)
    if rule is None:
        return TrustVerdict.UNKNOWN
    if rule.trust_level.grants_trust:
        return TrustVerdict.TRUSTED
    return TrustVerdict.UNTRUSTED
