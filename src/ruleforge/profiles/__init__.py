"""Declarative validation profiles and their YAML loader/linter."""

from ruleforge.profiles.loader import (
    DEFAULT_PROFILES_PATH,
    ProfileIssue,
    ProfileLoader,
    load_yaml_with_duplicates,
)
from ruleforge.profiles.validator import lint_profile_file, lint_profiles

__all__ = [
    "DEFAULT_PROFILES_PATH",
    "ProfileIssue",
    "ProfileLoader",
    "lint_profile_file",
    "lint_profiles",
    "load_yaml_with_duplicates",
]
