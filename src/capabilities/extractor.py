"""Heuristic extraction of capability phrases and spec URLs from free text.

This is keyword matching, not language understanding. The only guarantee is
determinism: the same request text always yields the same capability list.
"""

import re

DEFAULT_MAX_CAPABILITIES = 25
MIN_CAPABILITIES_CAP = 5
MAX_CAPABILITIES_CAP = 60
MIN_PHRASE_LENGTH = 6

ACTION_VERBS = (
    "create", "add", "update", "edit", "delete", "remove",
    "get", "fetch", "read", "retrieve", "list", "search",
    "sync", "import", "export", "upsert",
    "send", "post", "upload",
    "receive", "listen", "subscribe", "webhook", "event", "callback",
)

FALLBACK_CAPABILITIES = (
    "Read data from the target system",
    "Write data to the target system",
    "Receive events/webhooks from the target system",
)

_SPEC_URL_HINTS = ("openapi", "swagger", "/openapi", "/swagger")
_SPEC_URL_SUFFIXES = (".json", ".yaml", ".yml")

_URL_RE = re.compile(r"(https?://[^\s'\"<>]+)|(www\.[^\s'\"<>]+)", re.IGNORECASE)
_URL_TRAILING_PUNCTUATION = ".,;:)]"
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?])\s+")
_BULLET_RE = re.compile(r"^[\s>*•-]+")
_NUMBERED_RE = re.compile(r"^\d+[).\s]+")
_SEPARATOR_RE = re.compile(r";|,|•|\||/|\band\b|\bor\b", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_FILLER_RES = (
    re.compile(r"^so that\s+", re.IGNORECASE),
    re.compile(r"^we (can|need to|want to)\s+", re.IGNORECASE),
    re.compile(r"^\b(can|need to|want to|must)\b\s+", re.IGNORECASE),
)
_PARENTHETICAL_RE = re.compile(r"\s+\(.*?\)\s*")
_TRAILING_PUNCTUATION_RE = re.compile(r"[\s.,;:!?]+$")


def clamp_capabilities_cap(max_capabilities: float) -> int:
    return int(min(max(max_capabilities, MIN_CAPABILITIES_CAP), MAX_CAPABILITIES_CAP))


def extract_spec_url(text: str | None) -> str | None:
    """Return the first URL in ``text`` that looks like an OpenAPI/Swagger document."""
    if not text or not isinstance(text, str):
        return None

    for match in _URL_RE.finditer(text):
        candidate = match.group(0).rstrip(_URL_TRAILING_PUNCTUATION)
        if candidate.lower().startswith("www."):
            candidate = f"https://{candidate}"
        lower = candidate.lower()
        if any(hint in lower for hint in _SPEC_URL_HINTS) or lower.endswith(_SPEC_URL_SUFFIXES):
            return candidate
    return None


def normalize_line(line: str) -> str:
    line = _BULLET_RE.sub("", line)
    line = _NUMBERED_RE.sub("", line)
    return line.strip()


def split_into_candidate_phrases(text: str) -> list[str]:
    # URLs belong to the spec-URL helper; the "/" separator would shred them.
    text = _URL_RE.sub(" ", text)

    lines: list[str] = []
    for raw_line in text.split("\n"):
        for sentence in _SENTENCE_BREAK_RE.split(raw_line):
            line = normalize_line(sentence)
            if line:
                lines.append(line)

    phrases: list[str] = []
    for line in lines:
        parts = [part.strip() for part in _SEPARATOR_RE.split(line)]
        phrases.append(line)
        phrases.extend(part for part in parts if part)

    collapsed = (_WHITESPACE_RE.sub(" ", phrase).strip() for phrase in phrases)
    return [phrase for phrase in collapsed if len(phrase) >= MIN_PHRASE_LENGTH]


def looks_like_capability(phrase: str) -> bool:
    lower = phrase.lower()
    return any(verb in lower for verb in ACTION_VERBS)


def clean_capability(phrase: str) -> str:
    cleaned = phrase.strip()
    for filler_re in _LEADING_FILLER_RES:
        cleaned = filler_re.sub("", cleaned)
    cleaned = _PARENTHETICAL_RE.sub(" ", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    cleaned = _TRAILING_PUNCTUATION_RE.sub("", cleaned)
    return cleaned[:1].upper() + cleaned[1:]


def extract_capabilities(user_request: str, max_capabilities: float = DEFAULT_MAX_CAPABILITIES) -> list[str]:
    candidates = [
        clean_capability(phrase)
        for phrase in split_into_candidate_phrases(user_request or "")
        if looks_like_capability(phrase)
    ]
    unique = list(dict.fromkeys(candidate for candidate in candidates if candidate))
    if not unique:
        unique = list(FALLBACK_CAPABILITIES)
    return unique[: clamp_capabilities_cap(max_capabilities)]
