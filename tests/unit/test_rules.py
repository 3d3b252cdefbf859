"""Unit tests for the static rule tables."""

import pytest

from memgate.core.domain.rules import (
    FORCE_RETRIEVE_RULES,
    POLICY_HINTS_TAG,
    RISK_ANCHORS,
    RISK_RULES,
    SKIP_RULES,
    PatternRule,
    contains_cjk,
    first_match,
)

pytestmark = pytest.mark.unit


class TestRuleTables:
    """Tests for table shape and naming."""

    @pytest.mark.parametrize("rules", [SKIP_RULES, FORCE_RETRIEVE_RULES, RISK_RULES])
    def test_tables_are_immutable_sequences(self, rules):
        assert isinstance(rules, tuple)
        assert all(isinstance(rule, PatternRule) for rule in rules)

    def test_rule_names_are_unique(self):
        names = [rule.name for rule in SKIP_RULES + FORCE_RETRIEVE_RULES + RISK_RULES]
        assert len(names) == len(set(names))

    def test_rules_cannot_be_reassigned(self):
        with pytest.raises(AttributeError):
            SKIP_RULES[0].name = "renamed"

    def test_anchor_order(self):
        assert RISK_ANCHORS == (
            "安全守则",
            "文件操作规范",
            "风险控制",
            "security policy",
            "safe file operation",
        )
        assert POLICY_HINTS_TAG == "[policy-hints]"

    def test_anchor_block_is_itself_risky(self):
        """Anchors re-trigger risk detection, which is why expansion repeats."""
        assert first_match(RISK_RULES, " ".join(RISK_ANCHORS)) is not None


class TestFirstMatch:
    """Tests for rule lookup order."""

    def test_returns_first_matching_rule(self):
        rule = first_match(RISK_RULES, "delete the secret file")
        assert rule is not None
        assert rule.name == "destructive_operation"

    def test_returns_none_without_match(self):
        assert first_match(FORCE_RETRIEVE_RULES, "what time is it") is None


class TestContainsCjk:
    """Tests for CJK detection."""

    @pytest.mark.parametrize("text", ["你好", "abc 漢字", "カタカナ", "ひらがな", "안녕"])
    def test_detects_cjk(self, text):
        assert contains_cjk(text) is True

    @pytest.mark.parametrize("text", ["hello", "Ünïcödé", "🎉", ""])
    def test_ignores_other_scripts(self, text):
        assert contains_cjk(text) is False
