"""Tests for the sender access policy."""

from clawbridge.config import AccessPolicy
from clawbridge.domain.access import is_allowed


class TestOpenPolicy:
    def test_anyone_allowed(self):
        policy = AccessPolicy(mode="open")
        assert is_allowed("123", policy) is True
        assert is_allowed("", policy) is True

    def test_open_ignores_allow_set(self):
        policy = AccessPolicy(mode="open", allowed=frozenset({"A"}))
        assert is_allowed("B", policy) is True


class TestAllowlistPolicy:
    def test_members_allowed(self):
        policy = AccessPolicy(mode="allowlist", allowed=frozenset({"A", "B"}))
        assert is_allowed("A", policy) is True
        assert is_allowed("B", policy) is True

    def test_non_member_denied(self):
        policy = AccessPolicy(mode="allowlist", allowed=frozenset({"A", "B"}))
        assert is_allowed("C", policy) is False

    def test_empty_set_denies_all(self):
        assert is_allowed("A", AccessPolicy(mode="allowlist")) is False

    def test_default_mode_is_allowlist(self):
        assert AccessPolicy().mode == "allowlist"
        assert is_allowed("A", AccessPolicy()) is False

    def test_absent_policy_denies(self):
        assert is_allowed("A", None) is False
