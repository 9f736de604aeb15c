"""Composite rules that delegate to other registered rules."""

from typing import Any

from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.rules.builtin import is_empty
from ruleforge.validation.types import RuleFn, RuleOutcome


def make_optional(registry: RuleRegistry) -> RuleFn:
    """Build the optional rule bound to a rule registry.

    optional(value, label, rule_name, *params) passes for an empty value and
    otherwise returns the named rule's outcome verbatim. The inner rule is
    resolved at call time, so rules registered later are honored.
    """

    def optional(value: Any, label: str, rule_name: str | None = None, *params: Any) -> RuleOutcome:
        if is_empty(value):
            return RuleOutcome.ok()

        inner = registry.get(rule_name) if isinstance(rule_name, str) else None
        if inner is None:
            # Explicitly named inner rule must exist, unlike chain-level references
            return RuleOutcome.fail(f"Unknown validation rule: {rule_name}")
        return inner(value, label, *params)

    return optional
