"""Click CLI for running the relay server and one-off completions."""

from __future__ import annotations

import asyncio
import logging

import click
import uvicorn

from src.completion.bridge import CompletionBridge, CompletionError
from src.config import ConfigError, Settings
from src.server.app import create_app_from_settings

logger = logging.getLogger(__name__)


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Speech webhook relay."""
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = Settings.from_env()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind.")
@click.option("--port", default=7880, type=int, help="Port to listen on.")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Start the webhook relay HTTP server."""
    settings: Settings = ctx.obj["settings"]
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting relay on %s:%d", host, port)
    uvicorn.run(
        create_app_from_settings(settings),
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )


@cli.command()
@click.argument("speech_input")
@click.pass_context
def complete(ctx: click.Context, speech_input: str) -> None:
    """Send SPEECH_INPUT to the completion API and print the generated text."""
    settings: Settings = ctx.obj["settings"]
    bridge = CompletionBridge(
        api_key=settings.api_key,
        endpoint_url=settings.endpoint_url,
        timeout=settings.timeout,
    )
    try:
        output = asyncio.run(bridge.translate(speech_input))
    except CompletionError as exc:
        raise click.ClickException(f"Error processing speech: {exc}") from exc
    click.echo(output)
