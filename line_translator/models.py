"""Shared Pydantic data models for line-translator."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

# --- Enums ---


class Direction(str, Enum):
    TH_TO_EN = "th→en"
    EN_TO_TH = "en→th"


# --- Translation Models ---


class TranslationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    direction: Direction

    def format_reply(self) -> str:
        return f"[{self.direction.value}] {self.text}"


class InboundText(BaseModel):
    """A text message pulled out of a LINE message event."""

    model_config = ConfigDict(frozen=True)

    reply_token: str
    text: str
    source_type: str | None = None
    user_id: str | None = None
