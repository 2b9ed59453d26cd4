"""Shared test fixtures for speech-relay."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from src.completion.bridge import CompletionBridge

TEST_API_KEY = "sk-test-key"
TEST_ENDPOINT = "http://completions.test/v1/chat/completions"


@pytest.fixture
def bridge() -> CompletionBridge:
    return CompletionBridge(api_key=TEST_API_KEY, endpoint_url=TEST_ENDPOINT, timeout=5.0)


# --- Factory functions for test data ---


def make_completion_body(content: Any = "hello", **kwargs: Any) -> dict[str, Any]:
    """Factory for a successful chat-completion reply."""
    body: dict[str, Any] = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            },
        ],
    }
    body.update(kwargs)
    return body


@contextmanager
def patch_completion_client(
    response: httpx.Response | None = None,
    side_effect: BaseException | None = None,
) -> Iterator[AsyncMock]:
    """Patch httpx.AsyncClient in the bridge module; yields the mock client."""
    with patch("src.completion.bridge.httpx.AsyncClient") as mock_client_cls:
        mock_client = AsyncMock()
        if side_effect is not None:
            mock_client.post.side_effect = side_effect
        else:
            mock_client.post.return_value = response
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)
        mock_client_cls.return_value = mock_client
        yield mock_client


@contextmanager
def patch_corrupt_gzip_client() -> Iterator[None]:
    """Patch the bridge's client with a real one whose replies fail to decompress."""
    real_client_cls = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"Content-Encoding": "gzip", "Content-Type": "application/json"},
            content=b"not gzip",
        )

    transport = httpx.MockTransport(handler)
    with patch(
        "src.completion.bridge.httpx.AsyncClient",
        side_effect=lambda: real_client_cls(transport=transport),
    ):
        yield
