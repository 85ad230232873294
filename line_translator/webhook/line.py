"""LINE Messaging API integration.

Signature verification and event parsing are delegated to the SDK's
``WebhookParser``; replies go through ``MessagingApi.reply_message``
addressed by the event's one-time reply token.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from linebot.v3.messaging import (
    ApiClient,
    ApiException,
    Configuration,
    MessagingApi,
    ReplyMessageRequest,
    TextMessage,
)
from linebot.v3.webhook import WebhookParser
from linebot.v3.webhooks import MessageEvent, TextMessageContent

from line_translator.models import InboundText

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-line-signature"


class LineWebhook:
    """Verifies and parses LINE webhook request bodies."""

    def __init__(self, channel_secret: str) -> None:
        self._parser = WebhookParser(channel_secret)

    def parse(self, body: str, signature: str) -> list[Any]:
        """Return the events in ``body``.

        Raises ``linebot.v3.exceptions.InvalidSignatureError`` when the
        signature does not match; anything else raised means the payload
        itself could not be parsed.
        """
        return list(self._parser.parse(body, signature))


def extract_text(event: Any) -> InboundText | None:
    """Return the text content of a message event, or None for anything else."""
    if not isinstance(event, MessageEvent):
        return None
    if not isinstance(event.message, TextMessageContent):
        return None
    source = event.source
    return InboundText(
        reply_token=event.reply_token or "",
        text=event.message.text,
        source_type=getattr(source, "type", None),
        user_id=getattr(source, "user_id", None),
    )


class LineMessenger:
    """Sends replies through a shared, thread-safe ``MessagingApi`` client."""

    def __init__(self, api: MessagingApi) -> None:
        self._api = api

    @classmethod
    def from_token(cls, channel_token: str) -> LineMessenger:
        configuration = Configuration(access_token=channel_token)
        return cls(MessagingApi(ApiClient(configuration)))

    async def reply(self, reply_token: str, text: str) -> bool:
        """Send ``text`` on ``reply_token``. Returns False if delivery failed."""
        request = ReplyMessageRequest(
            reply_token=reply_token,
            messages=[TextMessage(text=text)],
        )
        try:
            await asyncio.to_thread(self._api.reply_message, request)
        except ApiException as exc:
            logger.warning("LINE reply rejected (status %s): %s", exc.status, exc.reason)
            return False
        return True
