"""Load validation profiles from YAML files."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ruleforge.validation.registry import ProfileRegistry
from ruleforge.validation.types import ValidationProfile

logger = logging.getLogger(__name__)

DEFAULT_PROFILES_PATH = Path(__file__).parent / "data"

_MERGE_TAG = "tag:yaml.org,2002:merge"


@dataclass
class ProfileIssue:
    """A single finding for a profile YAML file."""

    file: Path
    message: str
    path: str = ""          # Location within the document, e.g. "profiles/sound.query"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


class _DuplicateKeyLoader(yaml.SafeLoader):
    """SafeLoader that records duplicate mapping keys.

    PyYAML keeps the last value of a duplicated key without complaint; the
    behavior is kept, but every duplicate is recorded as (key, line).
    """

    def __init__(self, stream: Any):
        super().__init__(stream)
        self.duplicates: list[tuple[Any, int]] = []

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict:
        seen: set[Any] = set()
        for key_node, _ in node.value:
            if key_node.tag == _MERGE_TAG:
                continue
            key = self.construct_object(key_node, deep=True)
            try:
                if key in seen:
                    self.duplicates.append((key, key_node.start_mark.line + 1))
                seen.add(key)
            except TypeError:
                continue  # Unhashable key; SafeLoader reports it below
        return super().construct_mapping(node, deep=deep)


def load_yaml_with_duplicates(yaml_path: Path) -> tuple[Any, list[tuple[Any, int]]]:
    """Parse a YAML file, returning (document, [(duplicate_key, line), ...]).

    Raises:
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(yaml_path) as f:
        loader = _DuplicateKeyLoader(f)
        try:
            return loader.get_single_data(), loader.duplicates
        finally:
            loader.dispose()


class ProfileLoader:
    """Loads validation profiles from a directory of YAML files.

    Each file holds a top-level ``profiles`` mapping of profile key ->
    field -> rule chain. Files are read in sorted order; when a key is
    declared more than once (in one file or across files) the last
    declaration wins and a warning issue is recorded.
    """

    def __init__(self, profiles_path: Path = DEFAULT_PROFILES_PATH):
        self.profiles_path = Path(profiles_path)
        self.profiles: dict[str, ValidationProfile] = {}
        self.sources: dict[str, Path] = {}
        self.issues: list[ProfileIssue] = []

    def load_all(self) -> None:
        """Load every profile file under the profiles path."""
        self.profiles = {}
        self.sources = {}
        self.issues = []

        for yaml_file in self.list_files():
            self._load_file(yaml_file)

    def list_files(self) -> list[Path]:
        """List the profile files to load (a single file path is allowed)."""
        if self.profiles_path.is_file():
            return [self.profiles_path]
        if not self.profiles_path.is_dir():
            raise ValueError(f"Profiles directory does not exist: {self.profiles_path}")
        return sorted(self.profiles_path.glob("*.yaml"))

    def _load_file(self, yaml_file: Path) -> None:
        try:
            data, duplicates = load_yaml_with_duplicates(yaml_file)
        except (OSError, yaml.YAMLError) as exc:
            raise ValueError(f"Failed to load profile file {yaml_file}: {exc}") from exc

        for key, line in duplicates:
            self._warn(yaml_file, f"Duplicate key '{key}' (line {line}); the last declaration wins")

        if not data:
            return
        if not isinstance(data, dict) or not isinstance(data.get("profiles"), dict):
            raise ValueError(f"Profile file {yaml_file} must contain a 'profiles' mapping")

        for key, fields in data["profiles"].items():
            key = str(key)
            profile = self._resolve_profile(yaml_file, key, fields)
            if key in self.sources and self.sources[key] != yaml_file:
                self._warn(
                    yaml_file,
                    f"Profile '{key}' already declared in {self.sources[key].name}; "
                    "the last declaration wins",
                    path=f"profiles/{key}",
                )
            self.profiles[key] = profile
            self.sources[key] = yaml_file

    def _resolve_profile(self, yaml_file: Path, key: str, fields: Any) -> ValidationProfile:
        try:
            return ValidationProfile.from_dict(key, fields or {})
        except ValueError as exc:
            raise ValueError(f"{yaml_file}: {exc}") from exc

    def _warn(self, yaml_file: Path, message: str, path: str = "") -> None:
        logger.warning("%s: %s", yaml_file, message)
        self.issues.append(
            ProfileIssue(file=yaml_file, message=message, path=path, severity="warning")
        )

    def register_all(self, registry: ProfileRegistry) -> None:
        """Register every loaded profile into a registry."""
        for key, profile in self.profiles.items():
            registry.register(key, profile)

    def get_profile(self, key: str) -> ValidationProfile | None:
        return self.profiles.get(key)

    def list_profiles(self) -> list[str]:
        return sorted(self.profiles)
