import re


# ─────────────────────────────────────────────
# Guardrail configuration
# ─────────────────────────────────────────────

ABSOLUTE_TERMS = [
    "definitely",
    "certainly",
    "guaranteed",
    "no doubt",
    "pakka",
]

MEDICAL_TERMS = [
    "cancer",
    "diabetes",
    "heart attack",
    "death",
    "terminal",
    "disease",
    "diagnose",
    "cure",
]

LEGAL_TERMS = [
    "lawsuit",
    "court",
    "legal action",
    "jail",
    "crime",
]

FATALISTIC_PHRASES = [
    "nothing can be done",
    "no solution",
    "you will suffer",
    "bad fate",
    "unavoidable loss",
]

SENSITIVE_KEYWORDS = [
    "health",
    "disease",
    "death",
    "marriage",
    "shaadi",
    "divorce",
    "money",
    "career",
]

MEDICAL_DISCLAIMER = (
    "Numerology aur astrology medical diagnosis nahin dete. "
    "Health concerns ke liye qualified doctor se consult karein.\n\n"
)

LEGAL_DISCLAIMER = (
    "Astrology legal advice ki jagah nahin le sakti. "
    "Aise matters ke liye qualified legal professional se baat karein.\n\n"
)

GUIDANCE_NOTE = (
    "_Note: Ye guidance hai, fixed outcome ya guarantee nahin._"
)


# ─────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────

def enforce_guardrails(
    raw_response: str,
    *,
    question: str,
) -> str:
    """
    Enforce safety, tone, and certainty guardrails
    on raw LLM output.
    """
    text = raw_response.strip()

    text = _prepend_if_mentions(text, MEDICAL_TERMS, MEDICAL_DISCLAIMER)
    text = _prepend_if_mentions(text, LEGAL_TERMS, LEGAL_DISCLAIMER)
    text = _soften_absolutes(text)
    text = _remove_fatalism(text)

    return _append_note_if_needed(text, question)


# ─────────────────────────────────────────────
# Guardrail helpers
# ─────────────────────────────────────────────

def _prepend_if_mentions(text: str, terms, disclaimer: str) -> str:
    for term in terms:
        if re.search(rf"\b{re.escape(term)}\b", text, re.IGNORECASE):
            return disclaimer + text
    return text


def _soften_absolutes(text: str) -> str:
    for term in ABSOLUTE_TERMS:
        text = re.sub(
            rf"\b{term}\b",
            "likely",
            text,
            flags=re.IGNORECASE,
        )
    return text


def _remove_fatalism(text: str) -> str:
    for phrase in FATALISTIC_PHRASES:
        pattern = re.compile(re.escape(phrase), re.IGNORECASE)
        text = pattern.sub(
            "this may require conscious effort and awareness",
            text,
        )
    return text


def _append_note_if_needed(text: str, question: str) -> str:
    """
    Append a gentle note for sensitive domains.
    """
    lowered = question.lower()
    if any(k in lowered for k in SENSITIVE_KEYWORDS):
        return text + "\n\n" + GUIDANCE_NOTE
    return text
