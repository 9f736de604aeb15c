"""Shared fixtures for ruleforge tests."""

import pytest

from ruleforge.enums import StaticEnumSource
from ruleforge.validation import (
    ProfileRegistry,
    RuleRegistry,
    ValidationService,
    register_builtin_rules,
)


ENUM_TABLE = {
    "BizSoundGenderEnums": {
        "displayName": "Sound gender",
        "datas": [
            {"code": 1, "name": "Female", "displayName": "Female", "enumName": "FEMALE"},
            {"code": 2, "name": "Male", "displayName": "Male", "enumName": "MALE"},
        ],
    },
    "BizStatusEnums": {
        "displayName": "Status",
        "datas": [
            {"code": 1, "name": "Draft", "enumName": "DRAFT"},
            {"code": 2, "name": "Enabled", "enumName": "ENABLED"},
            {"code": 3, "name": "Disabled", "enumName": "DISABLED"},
        ],
    },
    "BizEmptyEnums": {"displayName": "Empty", "datas": []},
}


@pytest.fixture
def enum_source():
    """Small in-memory enum table."""
    return StaticEnumSource.from_mapping(ENUM_TABLE)


@pytest.fixture
def rules(enum_source):
    """Rule registry with every built-in rule."""
    registry = RuleRegistry()
    register_builtin_rules(registry, enum_source)
    return registry


@pytest.fixture
def service(rules):
    """Service with built-in rules and no profiles."""
    return ValidationService(rules, ProfileRegistry())
