"""Webhook relay — composes ingress validation and the completion bridge.

Pipeline stages:
1. Method check (405)
2. Body read and payload validation (400)
3. Completion call (500 on any bridge failure)
4. Result assembly (200)

Every failure is handled here and turned into a ``WebhookResponse``;
nothing is retried.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.completion.bridge import CompletionError
from src.models import OutboundResult
from src.webhook.ingress import BodyReader, IngressError, WebhookIngress
from src.webhook.models import WebhookResponse

if TYPE_CHECKING:
    from src.completion.bridge import CompletionBridge

logger = logging.getLogger(__name__)


class WebhookRelay:
    """Runs one webhook call through ingress and the completion bridge."""

    def __init__(
        self,
        bridge: CompletionBridge,
        ingress: WebhookIngress | None = None,
    ) -> None:
        self._bridge = bridge
        self._ingress = ingress or WebhookIngress()

    async def handle(self, method: str, read_body: BodyReader) -> WebhookResponse:
        # Stages 1-2: ingress
        try:
            payload = await self._ingress.extract(method, read_body)
        except IngressError as exc:
            logger.info("Webhook rejected (%s): %s", exc.status_code, exc)
            return WebhookResponse(status_code=exc.status_code, text=str(exc))

        # Stage 3: completion
        try:
            output = await self._bridge.translate(payload.speech_input)
        except CompletionError as exc:
            logger.error("Completion failed (%s): %s", type(exc).__name__, exc)
            return WebhookResponse(
                status_code=500,
                text=f"Error processing speech: {exc}",
            )

        # Stage 4: result
        return WebhookResponse(
            status_code=200,
            result=OutboundResult(processed_output=output),
        )
