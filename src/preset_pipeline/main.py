import uvicorn

from preset_pipeline.infrastructure.configuration.main_settings import Settings
from preset_pipeline.infrastructure.entrypoints.api.app_factory import create_app
from preset_pipeline.infrastructure.observability.tracing_setup import configure_tracing


def dev() -> None:
    """Run the development server."""
    uvicorn.run(
        "preset_pipeline.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )


# Instantiate global app for ASGI
settings = Settings()
configure_tracing(environment=settings.env)
app = create_app(settings)
