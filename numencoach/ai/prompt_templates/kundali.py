from typing import Dict

from numencoach.ai.prompt_templates.base import PERSONA


READING_FIELDS = ("summary", "details", "confidence", "basis", "cta", "disclaimer")

KUNDALI_READING_TEMPLATE = """
Given: Name: {name}, Nakshatra: {nakshatra}, Chart: {summary}
Details: {details}
Respond in Hinglish (Hindi+English mix) with exactly this JSON:
{{
  "summary": "2-line insight about their life (max 25 words)",
  "details": "Specific guidance with 1 action item (max 20 words)",
  "confidence": "high/medium/low",
  "basis": "Moon Nakshatra + chart analysis",
  "cta": "Agar detailed report chahiye, full analysis available hai",
  "disclaimer": "Guidance hai, professional advice nahin"
}}
Keep total under {word_limit} words. Be encouraging, use cultural examples.
"""


def build_kundali_prompt(
    *,
    name: str,
    nakshatra: str,
    summary: str,
    details: str,
    word_limit: int,
) -> Dict[str, str]:
    """
    Structured (JSON) kundali reading prompt.
    """
    return {
        "system": PERSONA.strip(),
        "user": KUNDALI_READING_TEMPLATE.format(
            name=name,
            nakshatra=nakshatra,
            summary=summary or "Balanced chart",
            details=details or "Good planetary positions",
            word_limit=word_limit,
        ).strip(),
    }
