"""FastAPI application exposing the health check and webhook routes."""

from __future__ import annotations

import functools

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from src.completion.bridge import CompletionBridge
from src.config import Settings
from src.webhook.ingress import read_body
from src.webhook.models import WebhookResponse
from src.webhook.relay import WebhookRelay

HEALTH_MESSAGE = "LiveKit is up and running!"


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    return create_app_from_settings(Settings.from_env())


def create_app_from_settings(settings: Settings) -> FastAPI:
    bridge = CompletionBridge(
        api_key=settings.api_key,
        endpoint_url=settings.endpoint_url,
        timeout=settings.timeout,
    )
    return create_app(bridge)


def create_app(bridge: CompletionBridge) -> FastAPI:
    """Create the relay FastAPI app around a configured completion bridge."""
    app = FastAPI(docs_url=None, redoc_url=None)
    relay = WebhookRelay(bridge)

    @app.get("/", response_class=PlainTextResponse)
    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        return HEALTH_MESSAGE

    # All methods are routed here so the relay, not the router, answers 405
    @app.api_route(
        "/webhook",
        methods=["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    )
    async def webhook(request: Request) -> Response:
        outcome = await relay.handle(
            request.method, functools.partial(read_body, request),
        )
        return _to_http_response(outcome)

    return app


def _to_http_response(outcome: WebhookResponse) -> Response:
    if outcome.result is not None:
        return JSONResponse(outcome.result.model_dump(), status_code=outcome.status_code)
    return PlainTextResponse(outcome.text, status_code=outcome.status_code)
