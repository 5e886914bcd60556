import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from preset_pipeline.core.application.ports import GenerationPort
from preset_pipeline.infrastructure.configuration.main_settings import Settings
from preset_pipeline.infrastructure.entrypoints.api.health_router import router as health_router
from preset_pipeline.infrastructure.entrypoints.api.metrics_router import (
    router as metrics_router,
)
from preset_pipeline.infrastructure.entrypoints.api.preset_router import router as preset_router
from preset_pipeline.infrastructure.observability.logger_factory_service import configure_logging
from preset_pipeline.infrastructure.observability.logging.correlation_middleware import (
    CorrelationMiddleware,
)
from preset_pipeline.infrastructure.resolution.container import build_container

logger = structlog.get_logger()


def create_app(settings: Settings, generation: GenerationPort | None = None) -> FastAPI:
    configure_logging(settings.log_level, settings.log_format, settings.env)
    logger.info(
        "Boot diagnostics",
        app_name=settings.app_name,
        env=settings.env,
        llm_keys_present={
            "openai": settings.llm.openai_api_key is not None,
            "anthropic": settings.llm.anthropic_api_key is not None,
            "gemini": settings.llm.gemini_api_key is not None,
            "deepseek": settings.llm.deepseek_api_key is not None,
        },
    )

    app = FastAPI(title=settings.app_name)
    app.state.container = build_container(settings, generation)
    app.add_middleware(CorrelationMiddleware)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(
            "Request validation failed",
            error_type="RequestValidationError",
            error_details=exc.errors(),
            context_endpoint=str(request.url.path),
        )
        return JSONResponse(
            status_code=422,
            content={"success": False, "detail": jsonable_errors(exc)},
        )

    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(preset_router, prefix="/api/v1")

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
