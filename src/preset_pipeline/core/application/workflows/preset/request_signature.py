"""Prompt-input sanitising and the idempotency signature of a request."""

import hashlib
import json
import re
from dataclasses import dataclass

from preset_pipeline.core.application.skills.preset.contracts.preset_pass_input import (
    ProjectContext,
)

MAX_PROMPT_INPUT_LENGTH = 5000
SIGNATURE_PREFIX = "processed:preset:"

_UNSAFE_CHARS_RE = re.compile(r"[<>{}\x00-\x1f\x7f]")


def sanitize_prompt_input(text: str) -> str:
    """Drop tag/JSON delimiters and control characters, cap the length, trim."""
    return _UNSAFE_CHARS_RE.sub("", text)[:MAX_PROMPT_INPUT_LENGTH].strip()


@dataclass(frozen=True)
class RequestSignature:
    digest: str

    @property
    def cache_key(self) -> str:
        return f"{SIGNATURE_PREFIX}{self.digest}"


class RequestSignatureBuilder:
    def build(self, user_id: str, context: ProjectContext) -> RequestSignature:
        """Deterministic sha256 over user id, sanitised description, answers and category."""
        payload = {
            "userId": user_id,
            "description": context.description,
            "answers": context.answers,
            "category": context.category.value if context.category else None,
        }
        raw = json.dumps(
            payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str
        )
        return RequestSignature(digest=hashlib.sha256(raw.encode("utf-8")).hexdigest())
