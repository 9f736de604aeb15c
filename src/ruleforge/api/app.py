"""FastAPI application."""

import logging

from fastapi import FastAPI

from ruleforge.api.endpoints import create_enums_router, create_validation_router
from ruleforge.bootstrap import create_validation_service
from ruleforge.config import ValidationConfig
from ruleforge.enums import StaticEnumSource
from ruleforge.validation import ValidationService

logger = logging.getLogger(__name__)


def create_app(
    service: ValidationService | None = None,
    enum_source: StaticEnumSource | None = None,
    config: ValidationConfig | None = None,
) -> FastAPI:
    """Create the API application.

    Args:
        service: Prebuilt validation service (built from config if omitted)
        enum_source: Enum table served by /api/enums (loaded from config if omitted)
        config: Paths and settings (read from the environment if omitted)

    Returns:
        Configured FastAPI application
    """
    if service is None or enum_source is None:
        config = config or ValidationConfig.from_env()
    if enum_source is None:
        enum_source = StaticEnumSource.from_yaml(config.enums_path)
    if service is None:
        service = create_validation_service(config, enum_source)

    app = FastAPI(title="ruleforge API")
    app.state.validation_service = service
    app.state.enum_source = enum_source

    app.include_router(create_validation_router())
    app.include_router(create_enums_router())

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    logger.info(
        "API ready: %d profiles, %d enum groups",
        len(service.profiles.list_keys()),
        len(enum_source.list_groups()),
    )
    return app
