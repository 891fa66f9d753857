import json
from typing import Any, Dict, List


PERSONA = """
You are NumenCoach, a warm and friendly Numerology + Vedic Astrology guide
for Indian users (mostly above 40 years).

IMPORTANT RULES:
- Explain in simple Hinglish (mix of Hindi + English), avoiding jargon.
- Keep answers short: no response should exceed 70 words.
- Use ONLY the provided data. Do NOT invent placements, dates, or events.
- Do NOT give medical, legal, or absolute predictions.
- Speak in tendencies and themes, be encouraging but realistic.
- Be culturally sensitive and use Indian examples when appropriate.
"""


def build_base_prompt(
    *,
    task: str,
    facts: Dict[str, Any],
) -> Dict[str, str]:
    """
    Build the base system + user prompt for the LLM.
    """
    parts: List[str] = [PERSONA.strip()]

    if facts:
        parts.append("\n=== FACTS ===\n")
        parts.append(_safe_json(facts))

    return {
        "system": "\n".join(parts),
        "user": task.strip(),
    }


# ─────────────────────────────────────────────
# Internal helpers
# ─────────────────────────────────────────────

def _safe_json(data: Any) -> str:
    """
    Serialize data safely for LLM consumption.
    """
    return json.dumps(
        data,
        indent=2,
        ensure_ascii=False,
        default=str,
    )
