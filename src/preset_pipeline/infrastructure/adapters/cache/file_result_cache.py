import asyncio
import json
import os
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from preset_pipeline.core.application.ports import ResultCachePort
from preset_pipeline.core.domain.pipeline import PipelineResult

logger = structlog.get_logger()


class FileResultCache(ResultCachePort):
    """JSON-file idempotency cache for single-instance deployments.

    Each entry is ``{"expiresAt": <epoch seconds>, "result": <PipelineResult wire form>}``.
    File I/O runs in a worker thread; writes use temp file + atomic rename.
    """

    FILE_NAME = "preset_result_cache.json"

    def __init__(self, store_dir: Path, clock: Callable[[], float] = time.time) -> None:
        self._store_dir = store_dir
        self._file_path = store_dir / self.FILE_NAME
        self._lock = asyncio.Lock()
        self._clock = clock
        self._ensure_store()

    def _ensure_store(self) -> None:
        self._store_dir.mkdir(parents=True, exist_ok=True)
        if not self._file_path.exists():
            self._write_json({})

    async def get(self, signature: str) -> PipelineResult | None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_json)
        entry = data.get(signature)
        if entry is None:
            return None
        if self._clock() >= entry.get("expiresAt", 0):
            return None
        try:
            return PipelineResult.model_validate(entry["result"])
        except (KeyError, ValidationError) as exc:
            logger.warning(
                "Discarding unreadable cache entry",
                error_type=type(exc).__name__,
                error_details=str(exc),
            )
            return None

    async def set(self, signature: str, result: PipelineResult, ttl_seconds: int) -> None:
        entry = {"expiresAt": self._clock() + ttl_seconds, "result": result.to_wire()}
        async with self._lock:
            await asyncio.to_thread(self._upsert, signature, entry)

    def _upsert(self, signature: str, entry: dict[str, Any]) -> None:
        data = self._read_json()
        now = self._clock()
        data = {k: v for k, v in data.items() if v.get("expiresAt", 0) > now}
        data[signature] = entry
        self._write_json(data)

    def _read_json(self) -> dict[str, Any]:
        if not self._file_path.exists():
            return {}
        try:
            content = self._file_path.read_text(encoding="utf-8").strip()
            return json.loads(content) if content else {}
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read result cache, treating as empty", error_details=str(exc))
            return {}

    def _write_json(self, data: dict[str, Any]) -> None:
        """Atomic write: write to temp file then rename."""
        tmp_path: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", dir=self._store_dir, delete=False, encoding="utf-8", suffix=".tmp"
            ) as tmp:
                json.dump(data, tmp)
                tmp_path = tmp.name
            os.replace(tmp_path, self._file_path)
        except OSError:
            logger.error("Failed to write result cache", file_path=str(self._file_path))
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
