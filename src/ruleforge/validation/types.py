"""Core types for the ruleforge validation engine.

This module defines the data model shared by every layer:
- RuleOutcome: result of a single rule function
- RuleInvocation / FieldRuleChain: declarative rule references in a profile
- ValidationProfile: per-field rule chains for one profile key
- ValidationResult: aggregated result of validating a field or record
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Protocol


class Operation(Enum):
    """The write operation a legacy table profile applies to."""

    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True)
class RuleOutcome:
    """Outcome of applying one rule to one value.

    Attributes:
        valid: True if the value satisfies the rule
        message: Human-readable failure message; present iff valid is False
    """

    valid: bool
    message: str | None = None

    def __post_init__(self) -> None:
        if self.valid and self.message is not None:
            raise ValueError("A valid RuleOutcome must not carry a message")
        if not self.valid and not self.message:
            raise ValueError("A failing RuleOutcome requires a message")

    @classmethod
    def ok(cls) -> "RuleOutcome":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str) -> "RuleOutcome":
        return cls(valid=False, message=message)


# Rule function signature: (value, label, *params) -> RuleOutcome
RuleFn = Callable[..., RuleOutcome]


class EnumSource(Protocol):
    """Protocol for the external enum lookup used by the *FromLib rules.

    Implementations must be synchronous and return an empty list for an
    unknown group.
    """

    def get_values(self, group_key: str) -> list[str]:
        """Return the allowed values of an enum group.

        Args:
            group_key: Enum group name (e.g., "BizSoundGenderEnums")

        Returns:
            Allowed values, or an empty list if the group is unknown
        """
        ...


@dataclass
class RuleInvocation:
    """A reference to a registered rule inside a field's chain.

    Attributes:
        rule: Registered rule name (e.g., "required", "enumFromLib")
        params: Positional arguments forwarded after (value, label)
        message: Custom label used in place of the field name in the
            rule's message. Ignored for "required".
    """

    rule: str
    params: list[Any] = field(default_factory=list)
    message: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleInvocation":
        """Create RuleInvocation from a YAML/JSON dict."""
        if not isinstance(data, dict) or not isinstance(data.get("rule"), str):
            raise ValueError(f"Rule invocation must be a mapping with a 'rule' name: {data!r}")

        params = data.get("params") or []
        if not isinstance(params, (list, tuple)):
            params = [params]

        return cls(
            rule=data["rule"],
            params=list(params),
            message=data.get("message"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"rule": self.rule}
        if self.params:
            result["params"] = list(self.params)
        if self.message is not None:
            result["message"] = self.message
        return result


# Ordered rule invocations for one field
FieldRuleChain = list[RuleInvocation]


def to_chain(chain: Any) -> FieldRuleChain:
    """Normalize a chain of RuleInvocation objects and/or dicts.

    Raises:
        TypeError: If chain is not a list or tuple
    """
    if not isinstance(chain, (list, tuple)):
        raise TypeError(f"Rule chain must be a list, got {type(chain).__name__}")
    return [
        item if isinstance(item, RuleInvocation) else RuleInvocation.from_dict(item)
        for item in chain
    ]


@dataclass
class ValidationProfile:
    """The complete set of per-field rule chains for one profile key.

    Variant profiles ("sound.draft") are independent declarations, not
    overrides of the base profile.

    Attributes:
        key: Profile key, a bare entity name or "entity.variant"
        fields: Field name -> rule chain, in declaration order
        description: Optional human-readable description
    """

    key: str
    fields: dict[str, FieldRuleChain] = field(default_factory=dict)
    description: str = ""

    @classmethod
    def from_dict(cls, key: str, data: dict[str, Any]) -> "ValidationProfile":
        """Create ValidationProfile from a {field: [invocation, ...]} mapping."""
        if not isinstance(data, dict):
            raise ValueError(f"Profile '{key}' must be a mapping of field -> rule chain")

        fields: dict[str, FieldRuleChain] = {}
        for field_name, chain in data.items():
            try:
                fields[str(field_name)] = to_chain(chain or [])
            except TypeError as exc:
                raise ValueError(f"Profile '{key}', field '{field_name}': {exc}") from exc

        return cls(key=key, fields=fields)

    def to_dict(self) -> dict[str, Any]:
        return {
            name: [invocation.to_dict() for invocation in chain]
            for name, chain in self.fields.items()
        }


@dataclass
class ValidationResult:
    """Result of validating a field or a record.

    Attributes:
        valid: True iff errors is empty
        errors: One message per failed rule, in evaluation order
    """

    valid: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(valid=len(errors) == 0, errors=list(errors))

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}
