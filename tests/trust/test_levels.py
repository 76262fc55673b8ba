"""Tests for foldertrust.trust.levels."""

from __future__ import annotations

import pytest

from foldertrust.trust.levels import TrustLevel, TrustRule, TrustVerdict


class TestTrustLevel:
    def test_tokens_are_stable(self) -> None:
        assert [level.value for level in TrustLevel] == [
            "TRUST_FOLDER",
            "TRUST_PARENT",
            "DO_NOT_TRUST",
        ]

    def test_parse_accepts_any_case(self) -> None:
        assert TrustLevel.parse("trust_folder") is TrustLevel.TRUST_FOLDER
        assert TrustLevel.parse(" Do_Not_Trust ") is TrustLevel.DO_NOT_TRUST
        assert TrustLevel.parse(TrustLevel.TRUST_PARENT) is TrustLevel.TRUST_PARENT

    @pytest.mark.parametrize("value", ["TRUST", "", 1, None, ["TRUST_FOLDER"]])
    def test_parse_rejects_unknown(self, value: object) -> None:
        with pytest.raises(ValueError, match="Invalid trust level"):
            TrustLevel.parse(value)

    def test_grants_trust(self) -> None:
        assert TrustLevel.TRUST_FOLDER.grants_trust
        assert TrustLevel.TRUST_PARENT.grants_trust
        assert not TrustLevel.DO_NOT_TRUST.grants_trust


class TestTrustRule:
    def test_is_immutable(self) -> None:
        rule = TrustRule("/a", TrustLevel.TRUST_FOLDER)
        with pytest.raises(AttributeError):
            rule.path = "/b"  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        assert TrustRule("/a", TrustLevel.TRUST_FOLDER) == TrustRule(
            "/a", TrustLevel.TRUST_FOLDER
        )


class TestTrustVerdict:
    def test_as_bool(self) -> None:
        assert TrustVerdict.TRUSTED.as_bool() is True
        assert TrustVerdict.UNTRUSTED.as_bool() is False
        assert TrustVerdict.UNKNOWN.as_bool() is None
