"""Built-in validation rules.

Usage:
    registry = RuleRegistry()
    register_builtin_rules(registry, enum_source)
"""

from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.rules import builtin
from ruleforge.validation.rules.builtin import (
    EMAIL_PATTERN,
    MD5_PATTERN,
    PHONE_PATTERN,
    is_empty,
    to_number,
)
from ruleforge.validation.rules.composite import make_optional
from ruleforge.validation.rules.enums import (
    contains,
    enum,
    enum_array,
    make_enum_array_from_lib,
    make_enum_from_lib,
)
from ruleforge.validation.types import EnumSource, RuleFn

# Rule name -> function for rules that need no collaborators
SIMPLE_RULES: dict[str, RuleFn] = {
    "required": builtin.required,
    "string": builtin.string,
    "length": builtin.length,
    "email": builtin.email,
    "url": builtin.url,
    "number": builtin.number,
    "integer": builtin.integer,
    "min": builtin.minimum,
    "max": builtin.maximum,
    "enum": enum,
    "date": builtin.date,
    "datetime": builtin.datetime_,
    "phone": builtin.phone,
    "json": builtin.json_,
    "md5": builtin.md5,
    "array": builtin.array,
    "enumArray": enum_array,
    "stringArray": builtin.string_array,
}


def register_builtin_rules(registry: RuleRegistry, enum_source: EnumSource) -> None:
    """Register every built-in rule on a registry.

    Args:
        registry: Target rule registry
        enum_source: Source used by enumFromLib and enumArrayFromLib
    """
    for name, rule_fn in SIMPLE_RULES.items():
        registry.register(name, rule_fn)

    registry.register("enumFromLib", make_enum_from_lib(enum_source))
    registry.register("enumArrayFromLib", make_enum_array_from_lib(enum_source))
    registry.register("optional", make_optional(registry))


__all__ = [
    "EMAIL_PATTERN",
    "MD5_PATTERN",
    "PHONE_PATTERN",
    "SIMPLE_RULES",
    "contains",
    "is_empty",
    "register_builtin_rules",
    "to_number",
]
