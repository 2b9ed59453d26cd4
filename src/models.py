"""Shared Pydantic data models for speech-relay."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictStr

# --- Inbound Models ---


class InboundPayload(BaseModel):
    """Decoded webhook body. Only ``speech_input`` is required."""

    model_config = ConfigDict(extra="allow", frozen=True)

    speech_input: StrictStr


class OutboundResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str = "Webhook received"
    processed_output: str


# --- Completion API Models ---


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    content: str


class CompletionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    messages: list[ChatMessage]
    max_tokens: int
    temperature: float


class ChoiceMessage(BaseModel):
    content: StrictStr


class CompletionChoice(BaseModel):
    message: ChoiceMessage


class CompletionResponse(BaseModel):
    """Top-level completion reply envelope.

    Both fields are left untyped so that a present-but-odd ``error`` or
    ``choices`` value still decodes; shape checks happen in the bridge.
    """

    error: Any = None
    choices: Any = None

    @property
    def has_error(self) -> bool:
        return "error" in self.model_fields_set
