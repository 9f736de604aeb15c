"""
profiles/validator.py — lint validation profile YAML files.

Checks each profile file for:
- structure, against ``schemas/profile.schema.json`` (JSON Schema)
- duplicate keys (PyYAML silently keeps the last one)
- references to rules that are not registered

Usage:
    from ruleforge.profiles.validator import lint_profiles

    issues = lint_profiles(Path("profiles"), known_rules=registry.list_registered())
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from ruleforge.profiles.loader import ProfileIssue, load_yaml_with_duplicates

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
_PROFILE_SCHEMA = "profile.schema.json"

# Rules whose first param names another rule
_DELEGATING_RULES = {"optional"}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema(name: str = _PROFILE_SCHEMA) -> dict[str, Any]:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _unknown_rule_issues(
    yaml_path: Path, doc: dict[str, Any], known_rules: set[str]
) -> list[ProfileIssue]:
    issues: list[ProfileIssue] = []
    for key, fields in (doc.get("profiles") or {}).items():
        for field_name, chain in (fields or {}).items():
            for index, invocation in enumerate(chain or []):
                rule = invocation.get("rule")
                path = f"profiles/{key}/{field_name}[{index}]"
                if rule not in known_rules:
                    issues.append(ProfileIssue(
                        file=yaml_path,
                        message=f"Unknown rule '{rule}' will be skipped",
                        path=path,
                        severity="warning",
                    ))
                elif rule in _DELEGATING_RULES:
                    params = invocation.get("params") or []
                    inner = params[0] if params else None
                    if inner not in known_rules:
                        issues.append(ProfileIssue(
                            file=yaml_path,
                            message=f"'{rule}' delegates to unknown rule '{inner}'",
                            path=path,
                            severity="warning",
                        ))
    return issues


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def lint_profile_file(
    yaml_path: Path,
    known_rules: Iterable[str] | None = None,
    *,
    schema: dict[str, Any] | None = None,
) -> list[ProfileIssue]:
    """
    Lint a single profile YAML file.

    Args:
        yaml_path:   Path to the YAML file.
        known_rules: Registered rule names.  Unknown-rule checks are skipped
                     when omitted.
        schema:      Pre-loaded profile schema.  Loaded automatically if omitted.

    Returns:
        A list of :class:`ProfileIssue` objects (empty on success).
    """
    # 1. Parse YAML, keeping track of duplicate keys
    try:
        doc, duplicates = load_yaml_with_duplicates(yaml_path)
    except yaml.YAMLError as exc:
        return [ProfileIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if doc is None:
        return [ProfileIssue(file=yaml_path, message="File is empty or contains only whitespace")]

    issues: list[ProfileIssue] = [
        ProfileIssue(
            file=yaml_path,
            message=f"Duplicate key '{key}' (line {line}); the last declaration wins",
            severity="warning",
        )
        for key, line in duplicates
    ]

    # 2. Structural validation
    validator = Draft202012Validator(schema or _load_schema())
    schema_errors = sorted(validator.iter_errors(doc), key=_json_path)
    for error in schema_errors:
        issues.append(
            ProfileIssue(file=yaml_path, message=error.message, path=_json_path(error))
        )

    # 3. Rule references (only meaningful on a structurally valid document)
    if known_rules is not None and not schema_errors:
        issues.extend(_unknown_rule_issues(yaml_path, doc, set(known_rules)))

    return issues


def lint_profiles(
    profiles_path: Path,
    known_rules: Iterable[str] | None = None,
    *,
    strict: bool = False,
) -> list[ProfileIssue]:
    """
    Lint every ``*.yaml`` profile file under *profiles_path*.

    Also reports profile keys declared in more than one file.

    Args:
        profiles_path: Directory of profile files, or a single file.
        known_rules:   Registered rule names.
        strict:        If ``True``, warnings are escalated to errors.

    Returns:
        A flat list of :class:`ProfileIssue` objects across all files.
    """
    if profiles_path.is_file():
        files = [profiles_path]
    elif profiles_path.is_dir():
        files = sorted(profiles_path.glob("*.yaml"))
    else:
        return [
            ProfileIssue(
                file=profiles_path,
                message=f"Profiles directory does not exist: {profiles_path}",
            )
        ]

    try:
        schema = _load_schema()
    except (FileNotFoundError, json.JSONDecodeError) as exc:
        return [
            ProfileIssue(file=_SCHEMAS_DIR, message=f"Failed to load JSON Schema file: {exc}")
        ]

    rules = list(known_rules) if known_rules is not None else None
    all_issues: list[ProfileIssue] = []
    declared_in: dict[str, Path] = {}

    for yaml_file in files:
        all_issues.extend(lint_profile_file(yaml_file, rules, schema=schema))

        try:
            doc, _ = load_yaml_with_duplicates(yaml_file)
        except yaml.YAMLError:
            continue  # Already reported above
        profiles = doc.get("profiles") if isinstance(doc, dict) else None
        if not isinstance(profiles, dict):
            continue
        for key in profiles:
            if key in declared_in:
                all_issues.append(ProfileIssue(
                    file=yaml_file,
                    message=f"Profile '{key}' already declared in {declared_in[key].name}",
                    path=f"profiles/{key}",
                    severity="warning",
                ))
            declared_in[key] = yaml_file

    if strict:
        for issue in all_issues:
            if issue.severity == "warning":
                issue.severity = "error"

    for issue in all_issues:
        logger.debug("Profile lint: %s", issue)

    return all_issues
