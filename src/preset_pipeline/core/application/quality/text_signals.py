"""Pure text helpers shared by the completeness heuristics."""

import re

_TOKEN_RE = re.compile(r"[a-z0-9]+")
_BULLET_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")

# Function words plus verbs every software task uses; they say nothing about the topic.
STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "about", "add", "after", "against", "all", "also", "an", "and", "any", "app",
        "application", "are", "as", "at", "based", "basic", "be", "been", "before", "being",
        "between", "build", "but", "by", "can", "create", "do", "each", "ensure", "for",
        "from", "has", "have", "had", "here", "how", "if", "in", "include", "including",
        "into", "is", "it", "its", "like", "make", "me", "more", "most", "must", "my",
        "need", "new", "no", "not", "of", "on", "onto", "or", "other", "our", "over", "per",
        "project", "provide", "setup", "set", "should", "simple", "so", "some", "such",
        "system", "than", "that", "the", "their", "then", "there", "these", "this", "those",
        "to", "under", "up", "us", "use", "using", "via", "was", "we", "were", "what",
        "when", "where", "which", "who", "will", "with", "within", "without", "your",
        "implement", "implementation", "develop", "development", "configure", "feature",
        "support", "task", "activity", "work",
    }
)


def normalize_term(token: str) -> str:
    """Fold simple English plurals so 'metrics' and 'metric' match."""
    if len(token) > 3 and token.endswith("s") and not token.endswith("ss"):
        return token[:-1]
    return token


def content_terms(text: str | None) -> set[str]:
    """Distinct topical terms of *text*: lower-cased, stop words and 1-char tokens removed."""
    if not text:
        return set()
    terms = set()
    for token in _TOKEN_RE.findall(text.lower()):
        if len(token) < 2 or token.isdigit() or token in STOP_WORDS:
            continue
        terms.add(normalize_term(token))
    return terms


def word_count(text: str | None) -> int:
    return len(text.split()) if text else 0


def non_empty_lines(text: str | None) -> list[str]:
    if not text:
        return []
    return [line for line in text.splitlines() if line.strip()]


def bullet_lines(text: str | None) -> int:
    return sum(1 for line in non_empty_lines(text) if _BULLET_RE.match(line))
