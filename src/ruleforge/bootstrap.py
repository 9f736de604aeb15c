"""Startup wiring for the validation service.

Builds the rule registry, enum source and profile registry once, and
exposes module-level functions bound to a process-wide default service.

Usage:
    from ruleforge import validate_record

    result = validate_record("sound.draft", {"name": "Rain", "status": "DRAFT"})

Handlers that prefer injection build their own service:

    service = create_validation_service(ValidationConfig.from_env())
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any

from ruleforge.config import ValidationConfig
from ruleforge.enums import StaticEnumSource
from ruleforge.profiles import ProfileLoader
from ruleforge.validation import (
    EnumSource,
    Operation,
    ProfileRegistry,
    RuleFn,
    RuleRegistry,
    ValidationProfile,
    ValidationResult,
    ValidationService,
    register_builtin_rules,
)

logger = logging.getLogger(__name__)

_default_service: ValidationService | None = None
_default_lock = threading.Lock()


def create_validation_service(
    config: ValidationConfig | None = None,
    enum_source: EnumSource | None = None,
    *,
    load_profiles: bool = True,
) -> ValidationService:
    """Build a ValidationService with built-in rules and the profile tables.

    Args:
        config: Paths and settings (defaults to the shipped tables)
        enum_source: Enum source for *FromLib rules (defaults to the YAML table)
        load_profiles: If False, start with an empty profile registry

    Returns:
        A ready-to-use ValidationService
    """
    config = config or ValidationConfig()
    if enum_source is None:
        enum_source = StaticEnumSource.from_yaml(config.enums_path)

    rules = RuleRegistry()
    register_builtin_rules(rules, enum_source)

    profiles = ProfileRegistry()
    if load_profiles:
        loader = ProfileLoader(config.profiles_path)
        loader.load_all()
        loader.register_all(profiles)
        logger.info(
            "Loaded %d validation profiles from %s",
            len(loader.profiles),
            config.profiles_path,
        )

    return ValidationService(rules, profiles)


def get_default_service() -> ValidationService:
    """Return the process-wide service, building it from the environment on first use."""
    global _default_service
    if _default_service is None:
        with _default_lock:
            if _default_service is None:
                _default_service = create_validation_service(ValidationConfig.from_env())
    return _default_service


def set_default_service(service: ValidationService | None) -> None:
    """Replace the process-wide service (None resets it). Primarily for testing."""
    global _default_service
    with _default_lock:
        _default_service = service


# =============================================================================
# Module-level API bound to the default service
# =============================================================================


def validate_record(profile_key: str, record: Mapping[str, Any]) -> ValidationResult:
    return get_default_service().validate_record(profile_key, record)


def validate_field(value: Any, label: str, chain: list[Any]) -> ValidationResult:
    return get_default_service().validate_field(value, label, chain)


def register_rule(name: str, rule_fn: RuleFn) -> None:
    get_default_service().register_rule(name, rule_fn)


def register_profile(key: str, profile: ValidationProfile | dict[str, Any]) -> ValidationProfile:
    return get_default_service().register_profile(key, profile)


def register_table_profile(table: str, config: dict[str, Any]) -> None:
    get_default_service().register_table_profile(table, config)


def validate_table_data(
    table: str,
    record: Mapping[str, Any],
    operation: Operation | str = Operation.CREATE,
) -> ValidationResult:
    return get_default_service().validate_table_data(table, record, operation)
