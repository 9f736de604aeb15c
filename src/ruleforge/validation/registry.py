"""Rule and profile registries for ruleforge.

Provides registration and lookup for:
- Rules (built-in and application-specific rule functions)
- Validation profiles (per-endpoint field rule chains)

Both registries are copy-on-write: registration swaps in a new mapping
under a lock, lookups read the current snapshot without locking.
"""

import logging
import threading
from typing import Any

from ruleforge.validation.types import RuleFn, ValidationProfile

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Registry of rule functions keyed by rule name.

    Unlike the profile registry, overwriting a rule is expected: callers
    may replace a built-in with their own implementation.

    Example:
        registry = RuleRegistry()
        registry.register("upperCode", upper_code_rule)
        rule = registry.get("upperCode")
    """

    def __init__(self) -> None:
        self._rules: dict[str, RuleFn] = {}
        self._lock = threading.Lock()

    def register(self, name: str, rule_fn: RuleFn) -> None:
        """Register a rule function, replacing any previous entry.

        Args:
            name: Rule name referenced from profiles
            rule_fn: Function (value, label, *params) -> RuleOutcome
        """
        with self._lock:
            if name in self._rules:
                logger.debug("Overriding validation rule '%s'", name)
            rules = dict(self._rules)
            rules[name] = rule_fn
            self._rules = rules

    def get(self, name: str) -> RuleFn | None:
        """Get a rule function by name, or None if not registered."""
        return self._rules.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._rules

    def list_registered(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._rules)

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        with self._lock:
            self._rules = {}


class ProfileRegistry:
    """Registry of validation profiles keyed by profile key.

    A missing key is not an error here; the record validator treats it
    as "no constraints".
    """

    def __init__(self) -> None:
        self._profiles: dict[str, ValidationProfile] = {}
        self._lock = threading.Lock()

    def register(self, key: str, profile: ValidationProfile | dict[str, Any]) -> ValidationProfile:
        """Register a profile, replacing any previous declaration.

        Args:
            key: Profile key (e.g., "sound", "sound.draft")
            profile: A ValidationProfile or a {field: [invocation, ...]} mapping

        Returns:
            The registered ValidationProfile
        """
        if isinstance(profile, ValidationProfile):
            if profile.key != key:
                profile = ValidationProfile(
                    key=key, fields=profile.fields, description=profile.description
                )
        else:
            profile = ValidationProfile.from_dict(key, profile)

        with self._lock:
            if key in self._profiles:
                logger.warning(
                    "Validation profile '%s' declared more than once; the last declaration wins",
                    key,
                )
            profiles = dict(self._profiles)
            profiles[key] = profile
            self._profiles = profiles
        return profile

    def get(self, key: str) -> ValidationProfile | None:
        """Get a profile by key, or None if not registered."""
        return self._profiles.get(key)

    def is_registered(self, key: str) -> bool:
        return key in self._profiles

    def list_keys(self) -> list[str]:
        """List all registered profile keys."""
        return sorted(self._profiles)

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        with self._lock:
            self._profiles = {}
