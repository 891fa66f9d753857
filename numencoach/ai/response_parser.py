import json
import re
from typing import Any, Dict

from numencoach.ai.prompt_templates.kundali import READING_FIELDS


CONFIDENCE_LEVELS = ("high", "medium", "low")

CONFIDENCE_KEYWORDS = {
    "high": [
        "strongly", "very likely", "clearly indicates", "high potential"
    ],
    "medium": [
        "likely", "suggests", "points toward", "can indicate"
    ],
    "low": [
        "may", "might", "possibly", "could"
    ],
}

# Words kept from `details` when a reading runs over the word limit
TRUNCATED_DETAIL_WORDS = 15

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class ReadingParseError(ValueError):
    """Raised when an LLM reply is not a usable JSON reading."""


def parse_llm_response(raw_text: str) -> Dict[str, Any]:
    """
    Parse free-text LLM output into text + inferred confidence.

    This function is intentionally tolerant and never raises.
    """
    cleaned = _clean_text(raw_text)
    return {
        "text": cleaned,
        "confidence": _infer_confidence(cleaned),
    }


def parse_reading(raw_text: str, *, word_limit: int) -> Dict[str, str]:
    """
    Parse a JSON kundali reading.

    - the first {...} block in the reply is decoded
    - every field in READING_FIELDS must be present and non-empty
    - when the whole reading exceeds `word_limit` words, `details`
      is cut to its first 15 words plus "..."
    - confidence outside high/medium/low becomes "medium"
    """
    match = _JSON_OBJECT.search(raw_text or "")
    if not match:
        raise ReadingParseError("No JSON found in response")

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise ReadingParseError(f"Invalid JSON in response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ReadingParseError("Reading is not a JSON object")

    for field in READING_FIELDS:
        if not parsed.get(field):
            raise ReadingParseError(f"Missing required field: {field}")

    reading = {field: str(parsed[field]).strip() for field in READING_FIELDS}

    if word_count(reading) > word_limit:
        words = reading["details"].split(" ")
        reading["details"] = " ".join(words[:TRUNCATED_DETAIL_WORDS]) + "..."

    if reading["confidence"] not in CONFIDENCE_LEVELS:
        reading["confidence"] = "medium"

    return reading


def word_count(reading: Dict[str, str]) -> int:
    return len(" ".join(reading.values()).split())


# ─────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────

def _clean_text(text: str) -> str:
    """
    Normalize whitespace and remove noise.
    """
    text = (text or "").strip()
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text


def _infer_confidence(text: str) -> str:
    """
    Infer confidence level from language.
    """
    lowered = text.lower()

    for level, keywords in CONFIDENCE_KEYWORDS.items():
        for kw in keywords:
            if re.search(rf"\b{re.escape(kw)}\b", lowered):
                return level

    # Default (safe)
    return "medium"
