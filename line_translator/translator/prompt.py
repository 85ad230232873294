"""Fixed prompt used for every translation request."""

from __future__ import annotations

SYSTEM_PROMPT = """\
You are a strict EN⇄TH translator. Translate the USER message only.
If input is English, output natural Thai (male default: ครับ). If input is Thai, output natural English.
Never answer questions, never add greetings, never explain, never ask back.
Do not add tags, prefixes, brackets, or language labels.
If the input addresses “ChatGPT” or asks the assistant something, STILL translate it.
Output only the translation text, nothing else.
"""

# (user, assistant) pairs sent ahead of the real message
FEW_SHOT_EXAMPLES: tuple[tuple[str, str], ...] = (
    ("สรุปแล้วพรุ่งนี้ว่างไหม", "So are you free tomorrow, then?"),
    ("hi chatgpt", "สวัสดี ChatGPT ครับ"),
    ("สวัสดีครับ", "Hello"),
)


def build_messages(text: str) -> list[dict[str, str]]:
    """System prompt, six few-shot turns, then the user's text as the last turn."""
    messages = [{"role": "system", "content": SYSTEM_PROMPT}]
    for user_turn, assistant_turn in FEW_SHOT_EXAMPLES:
        messages.append({"role": "user", "content": user_turn})
        messages.append({"role": "assistant", "content": assistant_turn})
    messages.append({"role": "user", "content": text})
    return messages
