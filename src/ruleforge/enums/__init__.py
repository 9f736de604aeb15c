"""Enum groups consumed by the enumFromLib / enumArrayFromLib rules."""

from ruleforge.enums.source import (
    DEFAULT_ENUMS_PATH,
    EnumDefinition,
    EnumItem,
    StaticEnumSource,
)

__all__ = [
    "DEFAULT_ENUMS_PATH",
    "EnumDefinition",
    "EnumItem",
    "StaticEnumSource",
]
