"""Data models for the webhook relay."""

from __future__ import annotations

from dataclasses import dataclass

from src.models import OutboundResult


@dataclass
class WebhookResponse:
    """Relay outcome to write back to the webhook caller."""

    status_code: int
    text: str = ""
    result: OutboundResult | None = None
