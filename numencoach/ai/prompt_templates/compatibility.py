from typing import Dict, Optional

from numencoach.ai.prompt_templates.base import build_base_prompt


def build_compatibility_prompt(
    *,
    name1: str,
    life_path1: int,
    name2: str,
    life_path2: int,
    score: int,
    context: Optional[str] = None,
) -> Dict[str, str]:
    """
    Couple compatibility prompt.
    """
    base = build_base_prompt(
        task=(
            f"{name1} (Life Path {life_path1}) and {name2} "
            f"(Life Path {life_path2}) have {score}% compatibility.\n"
            f"Context: {context or 'Based on life path numbers'}"
        ),
        facts={},
    )

    base["system"] += (
        "\n\nCOMPATIBILITY FOCUS:\n"
        "- Marriage/relationship harmony\n"
        "- Family life और kids\n"
        "- Financial partnership\n"
        "- Social compatibility\n"
    )

    return base
