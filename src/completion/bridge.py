"""Completion bridge — translates speech input into a chat-completion call.

Builds the outbound request, performs a single POST to the completion API
and parses the reply into generated text or a typed failure.
"""

from __future__ import annotations

import json
import logging

import httpx
from pydantic import ValidationError

from src.models import (
    ChatMessage,
    CompletionChoice,
    CompletionRequest,
    CompletionResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_TIMEOUT_SECONDS = 30.0

COMPLETION_MODEL = "gpt-4o-mini"
COMPLETION_MAX_TOKENS = 50
COMPLETION_TEMPERATURE = 0.7


class CompletionError(Exception):
    """Base class for failures while producing a completion."""


class SerializationError(CompletionError):
    """Raised when the outbound request cannot be encoded as JSON."""


class CompletionTransportError(CompletionError):
    """Raised when the completion API cannot be reached or read."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"completion request failed: {cause!r}")


class MalformedResponseError(CompletionError):
    """Raised when the completion reply does not have the expected shape."""


class RemoteAPIError(CompletionError):
    """Raised when the completion API reports an error object."""

    def __init__(self, error: object) -> None:
        self.error = error
        detail = json.dumps(error, separators=(",", ":"), sort_keys=True)
        super().__init__(f"completion API error: {detail}")


def build_request(input_text: str) -> CompletionRequest:
    """Wrap ``input_text`` as the sole user message of a completion request."""
    return CompletionRequest(
        model=COMPLETION_MODEL,
        messages=[ChatMessage(role="user", content=input_text)],
        max_tokens=COMPLETION_MAX_TOKENS,
        temperature=COMPLETION_TEMPERATURE,
    )


def parse_response(raw: bytes) -> str:
    """Extract the generated text from a raw completion reply."""
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise MalformedResponseError(
            f"invalid JSON in completion response: {exc}",
        ) from exc
    if not isinstance(data, dict):
        raise MalformedResponseError("completion response is not a JSON object")

    envelope = CompletionResponse.model_validate(data)
    if envelope.has_error:
        raise RemoteAPIError(envelope.error)

    choices = envelope.choices
    if not isinstance(choices, list) or not choices:
        raise MalformedResponseError("no choices in completion response")

    try:
        choice = CompletionChoice.model_validate(choices[0])
    except ValidationError as exc:
        # Errors under message.content mean the shape is right but text is missing
        if any(err["loc"][:2] == ("message", "content") for err in exc.errors()):
            raise MalformedResponseError("no generated text in response") from exc
        raise MalformedResponseError("invalid choice format") from exc

    return choice.message.content


class CompletionBridge:
    """Single-attempt client for an OpenAI-compatible chat completion API."""

    def __init__(
        self,
        api_key: str,
        endpoint_url: str = DEFAULT_ENDPOINT_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._endpoint_url = endpoint_url
        self._timeout = timeout

    async def translate(self, input_text: str) -> str:
        """Send ``input_text`` to the completion API and return the generated text."""
        request = build_request(input_text)
        try:
            body = request.model_dump_json().encode()
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"cannot encode completion request: {exc}") from exc

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient() as client:
                resp = await client.post(
                    self._endpoint_url,
                    content=body,
                    headers=headers,
                    timeout=self._timeout,
                )
                raw = resp.content
        except httpx.RequestError as exc:
            raise CompletionTransportError(exc) from exc

        logger.debug("Completion API status: %s", resp.status_code)
        logger.debug("Completion API raw response: %s", raw.decode(errors="replace"))

        return parse_response(raw)
