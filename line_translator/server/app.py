"""FastAPI application: health check and LINE webhook endpoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from linebot.v3.exceptions import InvalidSignatureError

from line_translator.config import Settings
from line_translator.translator.service import Translator
from line_translator.webhook.dispatcher import EventDispatcher
from line_translator.webhook.line import SIGNATURE_HEADER, LineMessenger, LineWebhook
from line_translator.webhook.processor import EventProcessor

logger = logging.getLogger(__name__)

HEALTH_PATH = "/healthz"
WEBHOOK_PATH = "/line/webhook"


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    settings = Settings.from_env()
    settings.require_credentials()
    return create_app(settings)


def create_app(
    settings: Settings,
    translator: Translator | None = None,
    messenger: LineMessenger | None = None,
) -> FastAPI:
    """Create the webhook app; outbound clients are built from settings unless given."""
    if translator is None:
        translator = Translator.from_api_key(settings.openai_api_key, settings.openai_model)
    if messenger is None:
        messenger = LineMessenger.from_token(settings.line_channel_token)

    webhook = LineWebhook(settings.line_channel_secret)
    processor = EventProcessor(translator, messenger)
    dispatcher = EventDispatcher(
        processor,
        workers=settings.webhook_workers,
        max_pending=settings.webhook_queue_size,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        await dispatcher.shutdown()
        await translator.aclose()

    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None, lifespan=lifespan)
    app.state.dispatcher = dispatcher

    @app.get(HEALTH_PATH)
    async def healthz() -> PlainTextResponse:
        return PlainTextResponse("ok")

    @app.post(WEBHOOK_PATH)
    async def line_webhook(request: Request) -> Response:
        client_ip = request.client.host if request.client else None
        signature = request.headers.get(SIGNATURE_HEADER, "")
        raw_body = await request.body()

        try:
            events = webhook.parse(raw_body.decode("utf-8"), signature)
        except InvalidSignatureError:
            logger.warning("Rejected webhook from %s: invalid signature", client_ip)
            return JSONResponse({"error": "Invalid signature"}, status_code=400)
        except Exception as exc:
            logger.error("Cannot parse webhook from %s: %s", client_ip, exc)
            return JSONResponse({"error": "Malformed webhook payload"}, status_code=500)

        logger.info("Received webhook from %s with %d event(s)", client_ip, len(events))
        if events:
            dispatcher.submit(events)

        # Acknowledge right away; event outcomes never change the response
        return JSONResponse({"status": "ok"}, status_code=200)

    return app
