"""Validation and enum API endpoints."""

import json
from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from ruleforge.enums import StaticEnumSource
from ruleforge.validation import ValidationService

INVALID_PARAMETERS = "INVALID_PARAMETERS"


class ValidationResponse(BaseModel):
    """Response body for a record validation."""
    valid: bool
    errors: list[str]


def get_validation_service(request: Request) -> ValidationService:
    """Dependency returning the service attached to the application."""
    service = getattr(request.app.state, "validation_service", None)
    if service is None:
        raise HTTPException(500, "Validation service not initialized")
    return service


def get_enum_source(request: Request) -> StaticEnumSource:
    """Dependency returning the enum source attached to the application."""
    enum_source = getattr(request.app.state, "enum_source", None)
    if enum_source is None:
        raise HTTPException(500, "Enum source not initialized")
    return enum_source


def _invalid_parameters(errors: list[str]) -> HTTPException:
    return HTTPException(
        400,
        {
            "code": INVALID_PARAMETERS,
            "message": "; ".join(errors),
            "errors": errors,
        },
    )


async def _read_json_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise _invalid_parameters(["Request body must be valid JSON"])
    if not isinstance(body, dict):
        raise _invalid_parameters(["Request body must be a JSON object"])
    return body


def validated_body(profile_key: str) -> Callable[..., Any]:
    """Create a dependency that validates the JSON body against a profile.

    The dependency returns the parsed body when it is valid and raises a
    400 with the collected messages otherwise.

    Example:
        @router.post("/sounds")
        async def create_sound(body: dict = Depends(validated_body("sound"))):
            ...
    """

    async def dependency(
        request: Request,
        service: ValidationService = Depends(get_validation_service),
    ) -> dict[str, Any]:
        body = await _read_json_object(request)
        result = service.validate_record(profile_key, body)
        if not result.valid:
            raise _invalid_parameters(result.errors)
        return body

    return dependency


def create_validation_router() -> APIRouter:
    """Create the validation router."""
    router = APIRouter(prefix="/api/validation", tags=["validation"])

    @router.get("/profiles")
    async def list_profiles(
        service: ValidationService = Depends(get_validation_service),
    ) -> dict[str, Any]:
        """List registered profile keys."""
        return {"data": service.profiles.list_keys()}

    @router.get("/profiles/{key}")
    async def get_profile(
        key: str,
        service: ValidationService = Depends(get_validation_service),
    ) -> dict[str, Any]:
        """Return the field rule chains of one profile."""
        profile = service.profiles.get(key)
        if profile is None:
            raise HTTPException(404, f"Validation profile '{key}' not found")
        return {"data": {"key": profile.key, "fields": profile.to_dict()}}

    @router.post("/{key}", response_model=ValidationResponse)
    async def validate(
        key: str,
        request: Request,
        service: ValidationService = Depends(get_validation_service),
    ) -> ValidationResponse:
        """Validate a record against a profile without rejecting the request."""
        body = await _read_json_object(request)
        result = service.validate_record(key, body)
        return ValidationResponse(valid=result.valid, errors=result.errors)

    return router


def create_enums_router() -> APIRouter:
    """Create the enum lookup router."""
    router = APIRouter(prefix="/api/enums", tags=["enums"])

    @router.get("")
    async def list_enums(
        enum_source: StaticEnumSource = Depends(get_enum_source),
    ) -> dict[str, Any]:
        """List enum group names."""
        return {"data": enum_source.list_groups()}

    @router.get("/{group}")
    async def get_enum(
        group: str,
        enum_source: StaticEnumSource = Depends(get_enum_source),
    ) -> dict[str, Any]:
        """Return one enum group with its items."""
        definition = enum_source.get_definition(group)
        if definition is None:
            raise HTTPException(404, f"Enum group '{group}' not found")
        return {"data": definition.to_dict()}

    return router
