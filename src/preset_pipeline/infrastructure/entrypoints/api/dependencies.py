from fastapi import Request

from preset_pipeline.infrastructure.resolution.container import PipelineContainer


def get_container(request: Request) -> PipelineContainer:
    return request.app.state.container
