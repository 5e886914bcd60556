"""Pure functions for reading raw generation output as JSON objects."""

import json
import re
from typing import Any

from preset_pipeline.core.application.exceptions import ResponseParseError

_OBJECT_RE = re.compile(r"(\{.*\})", re.DOTALL)


def parse_json_object(raw_content: str | None, pass_name: str) -> dict[str, Any]:
    """Return the first top-level JSON object found in *raw_content*.

    Markdown fences are stripped first; then the text between the first ``{``
    and the last ``}`` is decoded.
    """
    ctx = {"pass_name": pass_name}
    if not raw_content or not raw_content.strip():
        raise ResponseParseError("Generation backend returned empty content", context=ctx)

    clean = strip_markdown_fences(raw_content)
    match = _OBJECT_RE.search(clean)
    if match is None:
        raise ResponseParseError("No JSON object found in generation output", context=ctx)

    try:
        data = json.loads(match.group(1))
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"Invalid JSON in generation output: {exc}", context=ctx) from exc

    if not isinstance(data, dict):
        raise ResponseParseError("Generation output is not a JSON object", context=ctx)
    return data


def strip_markdown_fences(text: str) -> str:
    """Remove Markdown code fences that models sometimes wrap around JSON."""
    stripped = text.strip()
    stripped = _remove_opening_fence(stripped)
    if stripped.endswith("```"):
        stripped = stripped[:-3]
    return stripped.strip()


def _remove_opening_fence(text: str) -> str:
    if not text.startswith("```"):
        return text
    first_newline = text.find("\n")
    return text[first_newline + 1 :] if first_newline != -1 else text[3:]
