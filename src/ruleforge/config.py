"""Runtime configuration for the validation service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ruleforge.enums.source import DEFAULT_ENUMS_PATH
from ruleforge.profiles.loader import DEFAULT_PROFILES_PATH

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@dataclass
class ValidationConfig:
    """Where profiles and enums are read from, plus process settings.

    Defaults point at the tables shipped with the package.
    """

    profiles_path: Path = DEFAULT_PROFILES_PATH
    enums_path: Path = DEFAULT_ENUMS_PATH
    log_level: str = "info"
    port: int = 8000

    @classmethod
    def from_env(cls) -> ValidationConfig:
        """Create config from environment variables.

        Variables:
        - RULEFORGE_PROFILES_PATH: profile YAML directory (or single file)
        - RULEFORGE_ENUMS_PATH: enum table YAML file
        - RULEFORGE_LOG_LEVEL: critical | error | warning | info | debug
        - RULEFORGE_PORT: HTTP port for run_api.py

        Raises:
            ValueError: For an unknown log level or a non-numeric port
        """
        log_level = os.environ.get("RULEFORGE_LOG_LEVEL", "info").lower()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"Unsupported RULEFORGE_LOG_LEVEL '{log_level}'. "
                "Expected one of: " + ", ".join(LOG_LEVELS)
            )

        port = os.environ.get("RULEFORGE_PORT", "8000")
        try:
            port_number = int(port)
        except ValueError as exc:
            raise ValueError(f"RULEFORGE_PORT must be an integer, got '{port}'") from exc

        profiles_path = os.environ.get("RULEFORGE_PROFILES_PATH")
        enums_path = os.environ.get("RULEFORGE_ENUMS_PATH")

        return cls(
            profiles_path=Path(profiles_path) if profiles_path else DEFAULT_PROFILES_PATH,
            enums_path=Path(enums_path) if enums_path else DEFAULT_ENUMS_PATH,
            log_level=log_level,
            port=port_number,
        )
