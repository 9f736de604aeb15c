"""ruleforge validation engine.

This module provides the declarative validation engine:
- Rules: named functions (value, label, *params) -> RuleOutcome
- Profiles: per-field rule chains keyed by profile key ("sound", "sound.draft")
- ValidationService: field and record validators over both registries

Usage:
    from ruleforge.validation import (
        ProfileRegistry,
        RuleRegistry,
        ValidationService,
        register_builtin_rules,
    )

    rules = RuleRegistry()
    register_builtin_rules(rules, enum_source)
    service = ValidationService(rules, ProfileRegistry())
"""

from ruleforge.validation.registry import (
    ProfileRegistry,
    RuleRegistry,
)
from ruleforge.validation.rules import register_builtin_rules
from ruleforge.validation.services import (
    ValidationService,
    preprocess_record,
)
from ruleforge.validation.types import (
    EnumSource,
    FieldRuleChain,
    Operation,
    RuleFn,
    RuleInvocation,
    RuleOutcome,
    ValidationProfile,
    ValidationResult,
)

__all__ = [
    # Types
    "EnumSource",
    "FieldRuleChain",
    "Operation",
    "RuleFn",
    "RuleInvocation",
    "RuleOutcome",
    "ValidationProfile",
    "ValidationResult",
    # Registries
    "ProfileRegistry",
    "RuleRegistry",
    # Service
    "ValidationService",
    "preprocess_record",
    # Setup
    "register_builtin_rules",
]
