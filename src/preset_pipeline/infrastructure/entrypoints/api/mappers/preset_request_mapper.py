from uuid import uuid4

from preset_pipeline.core.domain.pipeline import PipelineInput
from preset_pipeline.infrastructure.entrypoints.api.dtos.generate_preset_dto import (
    GeneratePresetRequestDTO,
)


class PresetRequestMapper:
    @staticmethod
    def to_domain(dto: GeneratePresetRequestDTO) -> PipelineInput:
        """Raises InvalidPipelineInputError for an empty description or user id."""
        return PipelineInput(
            user_id=dto.user_id,
            description=dto.description,
            answers=dict(dto.answers),
            category=dto.category,
            request_id=dto.request_id or str(uuid4()),
        )
