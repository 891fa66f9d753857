from typing import Dict

from numencoach.ai.prompt_templates.base import build_base_prompt
from numencoach.domain.numerology.schemas import NumerologyProfile


def build_numerology_prompt(
    *,
    name: str,
    profile: NumerologyProfile,
) -> Dict[str, str]:
    """
    Personal numerology insight prompt.
    """
    facts = {
        "name": name,
        "life_path": profile.life_path_number,
        "expression": profile.expression_number,
        "soul_urge": profile.soul_urge_number,
        "personality": profile.personality_number,
    }

    return build_base_prompt(
        task=(
            f"Explain what Life Path {profile.life_path_number}, "
            f"Expression {profile.expression_number}, "
            f"Soul Urge {profile.soul_urge_number}, and "
            f"Personality {profile.personality_number} means for {name}. "
            "Be encouraging, use cultural examples."
        ),
        facts=facts,
    )
