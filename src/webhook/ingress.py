"""Webhook ingress — validates inbound webhook calls and extracts speech input."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable

from pydantic import ValidationError
from starlette.requests import ClientDisconnect, Request

from src.models import InboundPayload

logger = logging.getLogger(__name__)

BodyReader = Callable[[], Awaitable[bytes]]


class IngressError(Exception):
    """Base class for rejected webhook calls. Carries the HTTP status."""

    status_code = 400


class InvalidMethodError(IngressError):
    status_code = 405

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__("Invalid request method")


class BadBodyError(IngressError):
    status_code = 400


async def read_body(request: Request) -> bytes:
    """Read the full request body, mapping disconnects to ``BadBodyError``."""
    try:
        return await request.body()
    except ClientDisconnect as exc:
        raise BadBodyError("Error reading request body") from exc


class WebhookIngress:
    """Validates method and payload shape for a single webhook call."""

    def check_method(self, method: str) -> None:
        if method.upper() != "POST":
            raise InvalidMethodError(method)

    def parse(self, body: bytes) -> InboundPayload:
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise BadBodyError("Invalid JSON payload") from exc
        if not isinstance(data, dict):
            raise BadBodyError("Invalid JSON payload")

        logger.info("Webhook received: %s", data)

        try:
            return InboundPayload.model_validate(data)
        except ValidationError as exc:
            raise BadBodyError("Missing or invalid speech_input") from exc

    async def extract(self, method: str, read: BodyReader) -> InboundPayload:
        """Validate a webhook call and return its decoded payload.

        The body is only read once the method is known to be POST. Raises
        ``InvalidMethodError`` for anything else and ``BadBodyError`` when
        the body cannot be read or is not a JSON object carrying a string
        ``speech_input``.
        """
        self.check_method(method)
        return self.parse(await read())
