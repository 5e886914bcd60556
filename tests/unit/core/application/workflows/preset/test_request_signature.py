"""Unit tests — prompt-input sanitising and request signatures."""

from preset_pipeline.core.application.skills.preset.contracts.preset_pass_input import (
    ProjectContext,
)
from preset_pipeline.core.application.workflows.preset.request_signature import (
    MAX_PROMPT_INPUT_LENGTH,
    SIGNATURE_PREFIX,
    RequestSignatureBuilder,
    sanitize_prompt_input,
)
from preset_pipeline.core.domain.preset import TechCategory


def _context(
    description: str = "Inventory service",
    answers: dict | None = None,
    category: TechCategory | None = None,
) -> ProjectContext:
    return ProjectContext(description=description, answers=answers or {}, category=category)


class TestSanitizePromptInput:
    def test_removes_delimiters_and_control_characters(self) -> None:
        assert sanitize_prompt_input("a<b>{c}\x00\x1fd\x7f") == "abcd"

    def test_caps_length(self) -> None:
        assert len(sanitize_prompt_input("x" * (MAX_PROMPT_INPUT_LENGTH + 50))) == (
            MAX_PROMPT_INPUT_LENGTH
        )

    def test_trims_whitespace(self) -> None:
        assert sanitize_prompt_input("   Inventory service  ") == "Inventory service"

    def test_keeps_regular_punctuation(self) -> None:
        text = "REST API (v2): users, roles & permissions; 99.9% uptime!"
        assert sanitize_prompt_input(text) == text


class TestRequestSignatureBuilder:
    def test_is_deterministic(self) -> None:
        builder = RequestSignatureBuilder()
        first = builder.build("u-1", _context(answers={"b": 2, "a": 1}))
        second = builder.build("u-1", _context(answers={"a": 1, "b": 2}))
        assert first == second

    def test_digest_is_sha256_hex(self) -> None:
        signature = RequestSignatureBuilder().build("u-1", _context())
        assert len(signature.digest) == 64
        assert int(signature.digest, 16) >= 0

    def test_cache_key_is_prefixed(self) -> None:
        signature = RequestSignatureBuilder().build("u-1", _context())
        assert signature.cache_key == f"{SIGNATURE_PREFIX}{signature.digest}"
        assert signature.cache_key.startswith("processed:preset:")

    def test_every_component_changes_the_digest(self) -> None:
        builder = RequestSignatureBuilder()
        base = builder.build("u-1", _context())

        variants = [
            builder.build("u-2", _context()),
            builder.build("u-1", _context(description="Billing service")),
            builder.build("u-1", _context(answers={"team": 2})),
            builder.build("u-1", _context(category=TechCategory.BACKEND)),
        ]

        assert all(v.digest != base.digest for v in variants)
        assert len({v.digest for v in variants}) == len(variants)
