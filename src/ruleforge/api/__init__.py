"""HTTP adapter exposing the validation engine."""

from ruleforge.api.app import create_app
from ruleforge.api.endpoints import (
    ValidationResponse,
    get_enum_source,
    get_validation_service,
    validated_body,
)

__all__ = [
    "ValidationResponse",
    "create_app",
    "get_enum_source",
    "get_validation_service",
    "validated_body",
]
