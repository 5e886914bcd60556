"""Unit tests — text helpers behind the completeness heuristics."""

from preset_pipeline.core.application.quality.text_signals import (
    bullet_lines,
    content_terms,
    non_empty_lines,
    normalize_term,
    word_count,
)


class TestContentTerms:
    def test_lowercases_and_drops_stop_words(self) -> None:
        assert content_terms("Build the HR Dashboard with React") == {"hr", "dashboard", "react"}

    def test_folds_plurals(self) -> None:
        assert content_terms("employee metrics") == content_terms("employees metric")

    def test_skips_digits_and_single_characters(self) -> None:
        assert content_terms("v 2 x 2024 api") == {"api"}

    def test_handles_none_and_empty(self) -> None:
        assert content_terms(None) == set()
        assert content_terms("") == set()


class TestNormalizeTerm:
    def test_keeps_double_s_and_short_words(self) -> None:
        assert normalize_term("access") == "access"
        assert normalize_term("bus") == "bus"
        assert normalize_term("charts") == "chart"


class TestLineHelpers:
    def test_counts_words_and_lines(self) -> None:
        text = "First line here\n\n  \nSecond line"
        assert word_count(text) == 5
        assert non_empty_lines(text) == ["First line here", "Second line"]

    def test_recognises_dash_star_and_numbered_bullets(self) -> None:
        text = "Intro\n- one\n* two\n• three\n1. four\n2) five\n-not a bullet"
        assert bullet_lines(text) == 5

    def test_none_inputs_are_empty(self) -> None:
        assert word_count(None) == 0
        assert non_empty_lines(None) == []
        assert bullet_lines(None) == 0
