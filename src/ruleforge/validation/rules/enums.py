"""Enumeration rules.

Literal enumerations (enum, enumArray) take the allowed values as a param.
Library enumerations (enumFromLib, enumArrayFromLib) resolve the allowed
values from an injected EnumSource by group key.
"""

import logging
from typing import Any, Iterable

from ruleforge.validation.rules.builtin import is_array
from ruleforge.validation.types import EnumSource, RuleFn, RuleOutcome

logger = logging.getLogger(__name__)


def _same_value(a: Any, b: Any) -> bool:
    # Booleans only match booleans: True is not an allowed value of [0, 1]
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


def contains(allowed: Iterable[Any], value: Any) -> bool:
    """Type-strict membership test."""
    return any(_same_value(candidate, value) for candidate in allowed)


def _join(values: Iterable[Any]) -> str:
    return ", ".join(str(v) for v in values)


def _invalid_items(values: Iterable[Any], allowed: list[Any]) -> list[Any]:
    return [item for item in values if not contains(allowed, item)]


def _definition_missing(group_key: str) -> RuleOutcome:
    return RuleOutcome.fail(f"Enum definition '{group_key}' does not exist or is empty")


# =============================================================================
# Literal Enumerations
# =============================================================================


def enum(value: Any, label: str, allowed: list[Any] | None = None) -> RuleOutcome:
    allowed = list(allowed or [])
    if not contains(allowed, value):
        return RuleOutcome.fail(f"{label} must be one of: {_join(allowed)}")
    return RuleOutcome.ok()


def enum_array(value: Any, label: str, allowed: list[Any] | None = None) -> RuleOutcome:
    if not is_array(value):
        return RuleOutcome.fail(f"{label} must be an array")
    invalid = _invalid_items(value, list(allowed or []))
    if invalid:
        return RuleOutcome.fail(f"{label} contains invalid values: {_join(invalid)}")
    return RuleOutcome.ok()


# =============================================================================
# Library Enumerations
# =============================================================================


def _lookup(enum_source: EnumSource, group_key: str) -> list[Any] | None:
    """Resolve a group's values; None if the source itself failed."""
    try:
        return list(enum_source.get_values(group_key))
    except Exception:
        logger.warning("Enum source failed to resolve group '%s'", group_key, exc_info=True)
        return None


def make_enum_from_lib(enum_source: EnumSource) -> RuleFn:
    """Build the enumFromLib rule bound to an enum source."""

    def enum_from_lib(value: Any, label: str, group_key: str = "") -> RuleOutcome:
        allowed = _lookup(enum_source, group_key)
        if allowed is None:
            return RuleOutcome.fail(f"Enum validation failed for '{group_key}'")
        if not allowed:
            return _definition_missing(group_key)
        if not contains(allowed, value):
            return RuleOutcome.fail(f"{label} must be one of: {_join(allowed)}")
        return RuleOutcome.ok()

    return enum_from_lib


def make_enum_array_from_lib(enum_source: EnumSource) -> RuleFn:
    """Build the enumArrayFromLib rule bound to an enum source."""

    def enum_array_from_lib(value: Any, label: str, group_key: str = "") -> RuleOutcome:
        if not is_array(value):
            return RuleOutcome.fail(f"{label} must be an array")
        allowed = _lookup(enum_source, group_key)
        if allowed is None:
            return RuleOutcome.fail(f"Enum array validation failed for '{group_key}'")
        if not allowed:
            return _definition_missing(group_key)
        invalid = _invalid_items(value, allowed)
        if invalid:
            return RuleOutcome.fail(f"{label} contains invalid values: {_join(invalid)}")
        return RuleOutcome.ok()

    return enum_array_from_lib
