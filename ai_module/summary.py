import logging
from typing import Any, Optional, Sequence

from openai import OpenAI

import config
from models.member import Member

logger = logging.getLogger(__name__)


def build_prompt(members: Sequence[Member]) -> str:
    """Describes the roster and asks for a short welcoming summary."""
    roster = ", ".join(
        f'{m.first_name} "{m.road_name}" {m.last_name} (Member #{m.membership_no})'
        for m in members
    )
    return (
        f"I have a motorcycle chapter with the following members: {roster}.\n"
        "Analyze this list and give me a brief, energetic, \"biker-style\" welcoming "
        "summary of our pack strength.\n"
        "Mention how many members we have and keep it to 3-4 sentences."
    )


class ChapterAI:
    """
    Writes a short decorative paragraph about the roster using a hosted
    text-generation model. Never raises: any failure yields a fallback line.
    """

    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        self._client = client
        self.model = model or config.AI_MODEL

    @property
    def client(self) -> Any:
        # Created lazily so a missing API key only matters when a summary is requested
        if self._client is None:
            self._client = OpenAI()
        return self._client

    def generate_chapter_summary(self, members: Sequence[Member]) -> str:
        if not members:
            return config.AI_EMPTY_TEXT

        messages = [{"role": "user", "content": build_prompt(members)}]
        try:
            response = self.client.chat.completions.create(model=self.model, messages=messages)
            text = response.choices[0].message.content
        except Exception as exc:
            logger.error("AI summary generation failed: %s", exc)
            return config.AI_FALLBACK_TEXT

        if not text:
            logger.warning("AI summary came back empty")
            return config.AI_FALLBACK_TEXT
        return text.strip()
