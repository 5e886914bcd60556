from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from preset_pipeline.core.domain.preset import Preset


@dataclass(frozen=True)
class ValidationReport:
    valid: bool
    errors: tuple[str, ...] = ()


class PresetSchemaValidator:
    """Structural gate for candidate presets coming back from the backend.

    ``validate`` mirrors a boolean validator with its last error list exposed
    as ``last_errors``; concurrent callers should use ``check``, which keeps
    the errors in the returned report instead of on the instance.
    """

    def __init__(self) -> None:
        self.last_errors: list[str] = []

    def validate(self, candidate: Any) -> bool:
        report = self.check(candidate)
        self.last_errors = list(report.errors)
        return report.valid

    def check(self, candidate: Any) -> ValidationReport:
        if isinstance(candidate, Preset):
            candidate = candidate.to_wire()
        if not isinstance(candidate, dict):
            return ValidationReport(
                valid=False,
                errors=(f"/: expected an object, got {type(candidate).__name__}",),
            )
        try:
            Preset.model_validate(candidate, by_alias=True, by_name=False)
        except ValidationError as exc:
            return ValidationReport(valid=False, errors=self._format_errors(exc))
        return ValidationReport(valid=True)

    @staticmethod
    def _format_errors(exc: ValidationError) -> tuple[str, ...]:
        return tuple(
            f"/{'/'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
