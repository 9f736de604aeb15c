"""Validation service for ruleforge.

This module provides the service that evaluates profiles:
1. validate_field: runs one field's rule chain and collects every failure
2. validate_record: resolves a profile and validates each declared field
3. Registration helpers for rules, profiles and legacy table profiles
"""

import logging
from collections.abc import Mapping
from typing import Any

from ruleforge.validation.registry import ProfileRegistry, RuleRegistry
from ruleforge.validation.rules import is_empty
from ruleforge.validation.types import (
    FieldRuleChain,
    Operation,
    RuleFn,
    ValidationProfile,
    ValidationResult,
    to_chain,
)

logger = logging.getLogger(__name__)

REQUIRED_RULE = "required"
OPTIONAL_RULE = "optional"

_MISSING = object()

# Legacy callers pass "insert" for creates
_OPERATION_ALIASES = {"insert": Operation.CREATE}


class ValidationService:
    """Service that validates fields and records against registered profiles.

    The service owns no global state: the rule and profile registries are
    injected, so one service can be built at startup and shared by handlers.

    Validation collects everything wrong in one pass. Rules in a chain never
    short-circuit each other, and data problems are reported as messages in
    the result rather than raised.
    """

    def __init__(self, rules: RuleRegistry, profiles: ProfileRegistry):
        self.rules = rules
        self.profiles = profiles

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register_rule(self, name: str, rule_fn: RuleFn) -> None:
        """Register or override a rule."""
        self.rules.register(name, rule_fn)

    def register_profile(
        self, key: str, profile: ValidationProfile | dict[str, Any]
    ) -> ValidationProfile:
        """Register or replace a profile."""
        return self.profiles.register(key, profile)

    def register_table_profile(self, table: str, config: dict[str, Any]) -> None:
        """Register legacy "table.create" / "table.update" profiles.

        Args:
            table: Table name used as the profile key prefix
            config: Either {"create": profile, "update": profile} or a single
                profile used for both operations
        """
        create = config.get("create", config) if isinstance(config, dict) else config
        update = config.get("update", config) if isinstance(config, dict) else config
        self.profiles.register(f"{table}.{Operation.CREATE.value}", create)
        self.profiles.register(f"{table}.{Operation.UPDATE.value}", update)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_field(self, value: Any, label: str, chain: FieldRuleChain | list[Any]) -> ValidationResult:
        """Run a field's rule chain against a value.

        Args:
            value: The field value (None for absent)
            label: Field name used in messages
            chain: Ordered rule invocations (RuleInvocation or dicts)

        Returns:
            ValidationResult with one message per failed rule

        Raises:
            TypeError: If chain is not a list or tuple
        """
        errors: list[str] = []

        for invocation in to_chain(chain):
            rule_fn = self.rules.get(invocation.rule)
            if rule_fn is None:
                logger.warning(
                    "Unknown validation rule '%s' on field '%s'; skipping",
                    invocation.rule,
                    label,
                )
                continue

            # "required" always reports the bare field name so its message stays uniform
            if invocation.rule == REQUIRED_RULE:
                rule_label = label
            else:
                rule_label = invocation.message or label

            try:
                outcome = rule_fn(value, rule_label, *invocation.params)
            except (TypeError, ValueError):
                logger.warning(
                    "Invalid configuration for rule '%s' on field '%s'",
                    invocation.rule,
                    label,
                    exc_info=True,
                )
                errors.append(f"Invalid configuration for rule '{invocation.rule}' on {label}")
                continue
            if not outcome.valid:
                errors.append(outcome.message)

        return ValidationResult.from_errors(errors)

    def validate_record(self, profile_key: str, record: Mapping[str, Any]) -> ValidationResult:
        """Validate a record against a registered profile.

        Unknown profile keys fail open and return a valid result.

        Args:
            profile_key: Profile key (e.g., "sound", "sound.draft")
            record: The data being validated

        Returns:
            ValidationResult aggregating the errors of every field

        Raises:
            TypeError: If record is not a mapping
        """
        if not isinstance(record, Mapping):
            raise TypeError(f"Record must be a mapping, got {type(record).__name__}")

        profile = self.profiles.get(profile_key)
        if profile is None:
            logger.debug("No validation profile '%s'; accepting record", profile_key)
            return ValidationResult(valid=True, errors=[])

        errors: list[str] = []

        for field_name, chain in profile.fields.items():
            value = record.get(field_name, _MISSING)
            has_required = any(inv.rule == REQUIRED_RULE for inv in chain)
            has_optional = any(inv.rule == OPTIONAL_RULE for inv in chain)

            # Absent and not required: nothing to validate
            if value is _MISSING and not has_required:
                continue

            if value is _MISSING:
                value = None

            # Empty value on an optional field
            if has_optional and is_empty(value):
                continue

            result = self.validate_field(value, field_name, chain)
            errors.extend(result.errors)

        return ValidationResult.from_errors(errors)

    def validate_table_data(
        self,
        table: str,
        record: Mapping[str, Any],
        operation: Operation | str = Operation.CREATE,
    ) -> ValidationResult:
        """Validate a record against a legacy "table.create" / "table.update" profile."""
        operation = _OPERATION_ALIASES.get(operation, operation)
        try:
            operation = Operation(operation)
        except ValueError as exc:
            raise ValueError(f"Unsupported operation: {operation!r}") from exc
        return self.validate_record(f"{table}.{operation.value}", record)


def preprocess_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Drop None values and strip surrounding whitespace from strings.

    Returns a new dict; the input is not modified.
    """
    processed: dict[str, Any] = {}
    for key, value in record.items():
        if value is None:
            continue
        processed[key] = value.strip() if isinstance(value, str) else value
    return processed
