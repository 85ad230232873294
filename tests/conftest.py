"""Shared test fixtures for line-translator."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from line_translator.config import Settings
from line_translator.models import Direction, TranslationResult
from line_translator.translator.service import Translator
from line_translator.webhook.line import LineMessenger, LineWebhook

CHANNEL_SECRET = "test-channel-secret"


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def translator() -> MagicMock:
    fake = MagicMock(spec=Translator)
    fake.translate = AsyncMock(
        return_value=TranslationResult(text="สวัสดีครับ", direction=Direction.EN_TO_TH),
    )
    return fake


@pytest.fixture
def messenger() -> MagicMock:
    fake = MagicMock(spec=LineMessenger)
    fake.reply = AsyncMock(return_value=True)
    return fake


# --- Factory functions for test data ---


def make_settings(**kwargs: Any) -> Settings:
    """Factory for Settings with every required value filled in."""
    defaults: dict[str, Any] = {
        "line_channel_secret": CHANNEL_SECRET,
        "line_channel_token": "test-channel-token",
        "openai_api_key": "sk-test",
    }
    defaults.update(kwargs)
    return Settings(**defaults)


def make_text_event(
    text: str = "hello",
    reply_token: str = "reply-token-1",
    user_id: str = "U0123456789abcdef",
) -> dict[str, Any]:
    """A LINE text message event as it appears in a webhook body."""
    return {
        "type": "message",
        "mode": "active",
        "timestamp": 1_700_000_000_000,
        "source": {"type": "user", "userId": user_id},
        "webhookEventId": f"01HEVENT{reply_token.upper()}",
        "deliveryContext": {"isRedelivery": False},
        "replyToken": reply_token,
        "message": {
            "id": "468789577898262530",
            "type": "text",
            "quoteToken": "q3Plxr4AgKd",
            "text": text,
        },
    }


def _event_envelope(event_type: str, reply_token: str, user_id: str) -> dict[str, Any]:
    return {
        "type": event_type,
        "mode": "active",
        "timestamp": 1_700_000_000_000,
        "source": {"type": "user", "userId": user_id},
        "webhookEventId": f"01HEVENT{reply_token.upper()}",
        "deliveryContext": {"isRedelivery": False},
        "replyToken": reply_token,
    }


def make_sticker_event(
    reply_token: str = "reply-token-sticker",
    user_id: str = "U0123456789abcdef",
) -> dict[str, Any]:
    """A message event whose content is a sticker rather than text."""
    event = _event_envelope("message", reply_token, user_id)
    event["message"] = {
        "id": "468789577898262531",
        "type": "sticker",
        "quoteToken": "q3Plxr4AgKe",
        "packageId": "446",
        "stickerId": "1988",
        "stickerResourceType": "STATIC",
        "keywords": ["happy"],
    }
    return event


def make_follow_event(
    reply_token: str = "reply-token-follow",
    user_id: str = "U0123456789abcdef",
) -> dict[str, Any]:
    event = _event_envelope("follow", reply_token, user_id)
    event["follow"] = {"isUnblocked": False}
    return event


def make_payload(*events: dict[str, Any]) -> str:
    return json.dumps({"destination": "Uffffffffffffffffffffffffffffffff", "events": list(events)})


def sign_body(body: str, secret: str = CHANNEL_SECRET) -> str:
    """Compute the X-Line-Signature value for ``body``."""
    digest = hmac.new(secret.encode(), body.encode(), hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def parse_events(*events: dict[str, Any]) -> list[Any]:
    """Turn raw event dicts into SDK event objects via the real parser."""
    body = make_payload(*events)
    return LineWebhook(CHANNEL_SECRET).parse(body, sign_body(body))
