"""Tests for core types and the rule/profile registries."""

import logging

import pytest

from ruleforge.validation import (
    ProfileRegistry,
    RuleInvocation,
    RuleOutcome,
    RuleRegistry,
    ValidationProfile,
    ValidationResult,
)
from ruleforge.validation.types import to_chain


def always_ok(value, label):
    return RuleOutcome.ok()


def always_fail(value, label):
    return RuleOutcome.fail(f"{label} failed")


# =============================================================================
# Types
# =============================================================================


class TestRuleOutcome:
    def test_helpers(self):
        assert RuleOutcome.ok() == RuleOutcome(valid=True, message=None)
        assert RuleOutcome.fail("bad").message == "bad"

    def test_valid_outcome_rejects_message(self):
        with pytest.raises(ValueError):
            RuleOutcome(valid=True, message="unexpected")

    def test_failing_outcome_requires_message(self):
        with pytest.raises(ValueError):
            RuleOutcome(valid=False)
        with pytest.raises(ValueError):
            RuleOutcome(valid=False, message="")


class TestRuleInvocation:
    def test_from_dict(self):
        invocation = RuleInvocation.from_dict(
            {"rule": "length", "params": [1, 50], "message": "Enum type"}
        )
        assert invocation.rule == "length"
        assert invocation.params == [1, 50]
        assert invocation.message == "Enum type"

    def test_scalar_params_are_wrapped(self):
        invocation = RuleInvocation.from_dict({"rule": "enumFromLib", "params": "BizStatusEnums"})
        assert invocation.params == ["BizStatusEnums"]

    def test_missing_rule_raises(self):
        with pytest.raises(ValueError):
            RuleInvocation.from_dict({"params": [1]})

    def test_to_dict_omits_defaults(self):
        assert RuleInvocation(rule="required").to_dict() == {"rule": "required"}

    def test_to_chain_rejects_non_sequences(self):
        with pytest.raises(TypeError):
            to_chain({"rule": "required"})

    def test_to_chain_accepts_mixed_items(self):
        chain = to_chain([RuleInvocation(rule="required"), {"rule": "string"}])
        assert [inv.rule for inv in chain] == ["required", "string"]


class TestValidationProfile:
    def test_from_dict_keeps_field_order(self):
        profile = ValidationProfile.from_dict(
            "sound.draft",
            {
                "name": [{"rule": "required"}],
                "status": [{"rule": "required"}, {"rule": "enum", "params": [["DRAFT"]]}],
            },
        )
        assert list(profile.fields) == ["name", "status"]
        assert profile.fields["status"][1].params == [["DRAFT"]]

    def test_from_dict_rejects_non_mapping(self):
        with pytest.raises(ValueError):
            ValidationProfile.from_dict("sound", [{"rule": "required"}])

    def test_from_dict_rejects_bad_chain(self):
        with pytest.raises(ValueError, match="field 'name'"):
            ValidationProfile.from_dict("sound", {"name": "required"})

    def test_to_dict(self):
        data = {"name": [{"rule": "required"}, {"rule": "string", "message": "Name"}]}
        assert ValidationProfile.from_dict("sound", data).to_dict() == data


class TestValidationResult:
    def test_from_errors(self):
        assert ValidationResult.from_errors([]).valid
        result = ValidationResult.from_errors(["name is required"])
        assert not result.valid
        assert result.to_dict() == {"valid": False, "errors": ["name is required"]}


# =============================================================================
# Rule Registry
# =============================================================================


class TestRuleRegistry:
    def test_register_and_get(self):
        registry = RuleRegistry()
        registry.register("ok", always_ok)
        assert registry.get("ok") is always_ok
        assert registry.is_registered("ok")

    def test_unknown_rule_returns_none(self):
        assert RuleRegistry().get("missing") is None

    def test_register_overwrites(self, caplog):
        registry = RuleRegistry()
        registry.register("check", always_ok)
        with caplog.at_level(logging.DEBUG, logger="ruleforge.validation.registry"):
            registry.register("check", always_fail)
        assert registry.get("check") is always_fail
        assert "Overriding validation rule 'check'" in caplog.text

    def test_list_registered_is_sorted(self):
        registry = RuleRegistry()
        registry.register("zeta", always_ok)
        registry.register("alpha", always_ok)
        assert registry.list_registered() == ["alpha", "zeta"]

    def test_clear(self):
        registry = RuleRegistry()
        registry.register("ok", always_ok)
        registry.clear()
        assert registry.list_registered() == []

    def test_builtins_registered(self, rules):
        for name in (
            "required", "string", "length", "email", "url", "number", "integer",
            "min", "max", "enum", "date", "datetime", "phone", "json", "md5",
            "array", "enumArray", "stringArray", "enumFromLib", "enumArrayFromLib",
            "optional",
        ):
            assert rules.is_registered(name), name


# =============================================================================
# Profile Registry
# =============================================================================


class TestProfileRegistry:
    def test_register_mapping(self):
        registry = ProfileRegistry()
        profile = registry.register("sound", {"name": [{"rule": "required"}]})
        assert isinstance(profile, ValidationProfile)
        assert registry.get("sound") is profile
        assert registry.is_registered("sound")

    def test_register_profile_under_new_key(self):
        registry = ProfileRegistry()
        original = ValidationProfile.from_dict("sound", {"name": [{"rule": "required"}]})
        registered = registry.register("music", original)
        assert registered.key == "music"
        assert registered.fields is original.fields
        assert original.key == "sound"

    def test_unknown_key_returns_none(self):
        assert ProfileRegistry().get("nope") is None

    def test_reregistering_warns_and_last_wins(self, caplog):
        registry = ProfileRegistry()
        registry.register("sound.query", {"statusList": [{"rule": "stringArray"}]})
        with caplog.at_level(logging.WARNING, logger="ruleforge.validation.registry"):
            registry.register("sound.query", {"statusList": [{"rule": "enumArray"}]})
        assert registry.get("sound.query").fields["statusList"][0].rule == "enumArray"
        assert "declared more than once" in caplog.text

    def test_list_keys_and_clear(self):
        registry = ProfileRegistry()
        registry.register("sound.draft", {})
        registry.register("music", {})
        assert registry.list_keys() == ["music", "sound.draft"]
        registry.clear()
        assert registry.list_keys() == []
