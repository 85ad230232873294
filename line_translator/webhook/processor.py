"""Per-event translation pipeline.

For every text message in a webhook batch:
1. Translate under a fixed 30s deadline
2. Reply with ``[<direction>] <text>``, or the fixed error text on failure

Nothing raised while handling one event stops the rest of the batch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from line_translator.models import InboundText
from line_translator.webhook.line import extract_text

if TYPE_CHECKING:
    from line_translator.translator.service import Translator
    from line_translator.webhook.line import LineMessenger

logger = logging.getLogger(__name__)

TRANSLATION_TIMEOUT_SECONDS = 30.0
ERROR_REPLY_TEXT = "❌ Translation error, please try again"


class EventProcessor:
    """Handles the events of one webhook request, one at a time, in order.

    Holds only read-only references to shared clients, so a single
    instance serves every concurrent batch.
    """

    def __init__(
        self,
        translator: Translator,
        messenger: LineMessenger,
        translation_timeout: float = TRANSLATION_TIMEOUT_SECONDS,
    ) -> None:
        self._translator = translator
        self._messenger = messenger
        self._timeout = translation_timeout

    async def process(self, events: Iterable[Any]) -> None:
        for event in events:
            message = extract_text(event)
            if message is None:
                logger.debug("Skipping event of type %s", getattr(event, "type", "?"))
                continue
            try:
                await self.handle_text(message)
            except Exception:  # keep going with the rest of the batch
                logger.exception("Unexpected error handling text message")

    async def handle_text(self, message: InboundText) -> None:
        try:
            async with asyncio.timeout(self._timeout):
                result = await self._translator.translate(message.text)
        except Exception:
            logger.exception("Translation error (user %s)", message.user_id)
            if not await self._messenger.reply(message.reply_token, ERROR_REPLY_TEXT):
                logger.warning("Failed to send error message")
            return

        if await self._messenger.reply(message.reply_token, result.format_reply()):
            logger.info("Sent translation (%s)", result.direction.value)
        else:
            logger.warning("Failed to send translation")
