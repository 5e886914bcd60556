from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from preset_pipeline.infrastructure.entrypoints.api.dependencies import get_container
from preset_pipeline.infrastructure.observability import metrics_service  # noqa: F401
from preset_pipeline.infrastructure.resolution.container import PipelineContainer

router = APIRouter()


@router.get("/metrics")
def prometheus_metrics(container: PipelineContainer = Depends(get_container)) -> Response:
    # Pipeline counters live on the container registry, LLM metrics on the default one.
    content = container.metrics.render() + generate_latest(REGISTRY)
    return Response(content=content, media_type=CONTENT_TYPE_LATEST)


@router.get("/metrics/snapshot")
def metrics_snapshot(container: PipelineContainer = Depends(get_container)) -> dict[str, float]:
    return container.metrics.snapshot()
