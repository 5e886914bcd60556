import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from preset_pipeline.core.domain.pipeline import InvalidPipelineInputError
from preset_pipeline.infrastructure.entrypoints.api.dependencies import get_container
from preset_pipeline.infrastructure.entrypoints.api.dtos.generate_preset_dto import (
    GeneratePresetRequestDTO,
)
from preset_pipeline.infrastructure.entrypoints.api.mappers.preset_request_mapper import (
    PresetRequestMapper,
)
from preset_pipeline.infrastructure.resolution.container import PipelineContainer

logger = structlog.get_logger()
router = APIRouter()

_ENDPOINT = "/api/v1/presets/generate"


@router.post("/presets/generate", response_model=None)
async def generate_preset(
    dto: GeneratePresetRequestDTO,
    container: PipelineContainer = Depends(get_container),
) -> JSONResponse:
    try:
        pipeline_input = PresetRequestMapper.to_domain(dto)
        result = await container.workflow.execute(pipeline_input)
    except InvalidPipelineInputError as exc:
        logger.warning(
            "Rejected preset request",
            error_type=type(exc).__name__,
            error_details=str(exc),
            context_endpoint=_ENDPOINT,
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": str(exc)},
        )
    except Exception as exc:
        logger.error(
            "Router error in preset generation",
            processing_status="ERROR",
            error_type=type(exc).__name__,
            error_details=str(exc),
            error_retryable=False,
            context_endpoint=_ENDPOINT,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal processing error."},
        )
    return JSONResponse(status_code=status.HTTP_200_OK, content=result.to_wire())
