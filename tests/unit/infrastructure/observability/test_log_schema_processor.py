"""Unit tests — log_schema_processor (flat structlog events -> nested log schema)."""

from preset_pipeline.infrastructure.observability.logging import log_schema_processor


def _process(**event) -> dict:
    return log_schema_processor(None, "info", dict(event))


class TestLogSchemaProcessor:
    def test_builds_root_fields(self) -> None:
        result = _process(event="Preset pipeline started", level="info", correlation_id="c-1")

        assert result["message"] == "Preset pipeline started"
        assert result["level"] == "info"
        assert result["service"] == "preset-pipeline"
        assert result["correlation_id"] == "c-1"
        assert "extra" not in result

    def test_groups_pipeline_fields(self) -> None:
        result = _process(event="Expanding preset", request_id="req-1", stage="expand", attempt=2)

        assert result["pipeline"] == {"request_id": "req-1", "stage": "expand", "attempt": 2}

    def test_groups_error_fields(self) -> None:
        result = _process(
            event="Expand attempt failed",
            error_type="GenerationTimeoutError",
            error_details="timed out after 50s",
        )

        assert result["error"] == {
            "type": "GenerationTimeoutError",
            "details": "timed out after 50s",
            "retryable": False,
        }

    def test_groups_processing_fields(self) -> None:
        result = _process(
            event="Preset pipeline completed",
            processing_status="FALLBACK",
            processing_duration_ms="1250",
            processing_retries=1,
        )

        assert result["processing"] == {"status": "FALLBACK", "duration_ms": 1250.0, "retries": 1}

    def test_groups_http_context(self) -> None:
        result = _process(
            event="Request processed",
            context_endpoint="/api/v1/presets/generate",
            context_method="POST",
        )

        assert result["context"] == {
            "component": None,
            "endpoint": "/api/v1/presets/generate",
            "method": "POST",
        }

    def test_moves_unknown_keys_to_extra(self) -> None:
        result = _process(event="Cache hit", prompt_hash="abc", activity_count=7)
        assert result["extra"] == {"prompt_hash": "abc", "activity_count": 7}
