"""ruleforge: declarative, profile-driven record validation."""

from ruleforge.bootstrap import (
    create_validation_service,
    get_default_service,
    register_profile,
    register_rule,
    register_table_profile,
    set_default_service,
    validate_field,
    validate_record,
    validate_table_data,
)

__version__ = "0.1.0"

__all__ = [
    "create_validation_service",
    "get_default_service",
    "register_profile",
    "register_rule",
    "register_table_profile",
    "set_default_service",
    "validate_field",
    "validate_record",
    "validate_table_data",
]
