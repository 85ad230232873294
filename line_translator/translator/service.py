"""Streaming chat-completion translator.

Sends the fixed prompt plus the user's text to the OpenAI chat completions
API with deterministic decoding, joins the streamed deltas in arrival
order and tags the result with a direction label.

Errors from opening or reading the stream propagate unchanged. Deadlines
are applied by the caller (see ``EventProcessor``).
"""

from __future__ import annotations

import logging

import httpx
from openai import AsyncOpenAI

from line_translator.models import TranslationResult
from line_translator.translator.language import direction_for
from line_translator.translator.prompt import build_messages

logger = logging.getLogger(__name__)

_HTTP_TIMEOUT_SECONDS = 30.0


class Translator:
    """EN⇄TH translator backed by a shared ``AsyncOpenAI`` client."""

    def __init__(self, client: AsyncOpenAI, model: str) -> None:
        self._client = client
        self._model = model

    @classmethod
    def from_api_key(cls, api_key: str, model: str) -> Translator:
        # No SDK-level retries; a failed call becomes an error reply
        http_client = httpx.AsyncClient(timeout=httpx.Timeout(_HTTP_TIMEOUT_SECONDS, connect=5.0))
        client = AsyncOpenAI(api_key=api_key, http_client=http_client, max_retries=0)
        return cls(client, model)

    async def translate(self, text: str) -> TranslationResult:
        stream = await self._client.chat.completions.create(
            model=self._model,
            messages=build_messages(text),  # type: ignore[arg-type]
            temperature=0,
            top_p=1,
            stream=True,
        )

        parts: list[str] = []
        async with stream:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    parts.append(content)

        translated = "".join(parts).strip()
        direction = direction_for(text)
        logger.debug("Translated %d chars (%s)", len(text), direction.value)
        return TranslationResult(text=translated, direction=direction)

    async def aclose(self) -> None:
        await self._client.close()
