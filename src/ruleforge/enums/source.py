"""In-memory enum source backed by a YAML enum table.

The table maps a group key to its definition:

    BizSoundGenderEnums:
      displayName: BizSoundGenderEnums
      datas:
        - {code: 1, name: Female, displayName: Female, enumName: FEMALE}

Validation rules only see the ``enumName`` values, through get_values().
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml

logger = logging.getLogger(__name__)

DEFAULT_ENUMS_PATH = Path(__file__).parent / "data" / "enums.yaml"


@dataclass(frozen=True)
class EnumItem:
    """One value of an enum group."""

    code: int | str
    name: str
    display_name: str
    enum_name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnumItem":
        if "enumName" not in data:
            raise ValueError(f"Enum item is missing 'enumName': {data!r}")
        name = str(data.get("name", data["enumName"]))
        return cls(
            code=data.get("code", 0),
            name=name,
            display_name=str(data.get("displayName", name)),
            enum_name=str(data["enumName"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "displayName": self.display_name,
            "enumName": self.enum_name,
        }


@dataclass
class EnumDefinition:
    """A named enum group."""

    name: str
    display_name: str = ""
    items: list[EnumItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "EnumDefinition":
        if not isinstance(data, dict):
            raise ValueError(f"Enum definition '{name}' must be a mapping")
        return cls(
            name=str(data.get("name", name)),
            display_name=str(data.get("displayName", name)),
            items=[EnumItem.from_dict(item) for item in data.get("datas") or []],
        )

    @property
    def values(self) -> list[str]:
        return [item.enum_name for item in self.items]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "datas": [item.to_dict() for item in self.items],
        }


class StaticEnumSource:
    """EnumSource implementation over an in-memory table.

    Lookups never perform I/O; the table is read once at construction.
    """

    def __init__(self, definitions: Iterable[EnumDefinition] = ()):
        self._definitions: dict[str, EnumDefinition] = {d.name: d for d in definitions}

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "StaticEnumSource":
        """Build a source from a {group: definition} mapping."""
        if not isinstance(data, dict):
            raise ValueError("Enum table must be a mapping of group name -> definition")
        return cls(EnumDefinition.from_dict(str(key), value) for key, value in data.items())

    @classmethod
    def from_yaml(cls, path: Path = DEFAULT_ENUMS_PATH) -> "StaticEnumSource":
        """Load the enum table from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ValueError(f"Failed to load enum table {path}: {exc}") from exc
        if isinstance(data, dict) and "enums" in data:
            data = data["enums"]
        return cls.from_mapping(data)

    def get_values(self, group_key: str) -> list[str]:
        """Return the enumName values of a group, or [] if unknown."""
        definition = self._definitions.get(group_key)
        if definition is None or not definition.items:
            logger.warning("Enum definition '%s' does not exist", group_key)
            return []
        return definition.values

    def get_definition(self, group_key: str) -> EnumDefinition | None:
        return self._definitions.get(group_key)

    def list_groups(self) -> list[str]:
        return sorted(self._definitions)

    def is_valid_value(self, group_key: str, value: Any) -> bool:
        return value in self.get_values(group_key)

    def validate_values(self, group_key: str, values: Iterable[Any]) -> list[Any]:
        """Return the values that are not part of the group."""
        allowed = self.get_values(group_key)
        return [value for value in values if value not in allowed]
