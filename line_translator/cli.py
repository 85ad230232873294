"""Click entry point: validate configuration, build clients, serve."""

from __future__ import annotations

import logging
from typing import NoReturn

import click
import uvicorn

from line_translator.config import ConfigError, Settings
from line_translator.server.app import HEALTH_PATH, WEBHOOK_PATH, create_app
from line_translator.translator.service import Translator
from line_translator.webhook.line import LineMessenger

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _fatal(ctx: click.Context, message: str, *args: object) -> NoReturn:
    logger.critical(message, *args)
    ctx.exit(1)


@click.group()
def cli() -> None:
    """EN⇄TH translation bot for LINE."""


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind.")
@click.option("--port", default=None, help="Port to listen on (defaults to $PORT or 8080).")
@click.pass_context
def serve(ctx: click.Context, host: str, port: str | None) -> None:
    """Run the webhook server."""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        # pydantic.ValidationError is a ValueError too
        logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)
        _fatal(ctx, "Invalid configuration: %s", exc)
    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)

    try:
        settings.require_credentials()
    except ConfigError as exc:
        _fatal(
            ctx,
            "Missing LINE_CHANNEL_SECRET, LINE_CHANNEL_TOKEN, or OPENAI_API_KEY: %s",
            ", ".join(exc.missing),
        )

    port_value = port or settings.port
    try:
        bind_port = int(port_value)
    except ValueError:
        _fatal(ctx, "Invalid port: %r", port_value)

    try:
        messenger = LineMessenger.from_token(settings.line_channel_token)
    except Exception as exc:
        _fatal(ctx, "Failed to create LINE bot client: %s", exc)
    try:
        translator = Translator.from_api_key(settings.openai_api_key, settings.openai_model)
    except Exception as exc:
        _fatal(ctx, "Failed to create OpenAI client: %s", exc)
    logger.info("OpenAI client initialized (model %s)", settings.openai_model)

    app = create_app(settings, translator=translator, messenger=messenger)

    logger.info("Server starting on %s:%d", host, bind_port)
    logger.info("LINE webhook endpoint: %s", WEBHOOK_PATH)
    logger.info("Health check endpoint: %s", HEALTH_PATH)
    uvicorn.run(app, host=host, port=bind_port, log_level=settings.log_level.lower())


def main() -> None:
    cli()
