from typing import Dict, Iterable, List, Optional

from numencoach.ai.prompt_templates.base import PERSONA


def build_chat_messages(
    *,
    message: str,
    history: Iterable[Dict[str, str]] = (),
    user_name: Optional[str] = None,
) -> List[Dict[str, str]]:
    """
    System persona, prior turns, then the new user message.
    """
    system = PERSONA.strip()
    if user_name:
        system += f"\n\nYou are talking to {user_name}."

    messages: List[Dict[str, str]] = [{"role": "system", "content": system}]
    messages.extend(
        {"role": turn["role"], "content": turn["content"]}
        for turn in history
    )
    messages.append({"role": "user", "content": message.strip()})

    return messages
