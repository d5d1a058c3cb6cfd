"""
Models for the JSON events received over the realtime call socket.

Only two event types carry conversation text: ``transcript`` (what the user
said) and ``agent_response`` (what the agent said). Everything else on the
socket is ignored by the client.
"""

import json
import logging
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from voicechat.config.constants import (
    LOGGER_NAME,
    MESSAGE_TYPE_AGENT_RESPONSE,
    MESSAGE_TYPE_TRANSCRIPT,
)

logger = logging.getLogger(LOGGER_NAME)


class TranscriptMessage(BaseModel):
    """Recognized user speech."""

    type: Literal["transcript"]
    text: str = Field(..., description="Recognized text")


class AgentResponseMessage(BaseModel):
    """Text of the agent's reply."""

    type: Literal["agent_response"]
    text: str = Field(..., description="Agent reply text")


RealtimeMessage = Union[TranscriptMessage, AgentResponseMessage]

_MESSAGE_MODELS = {
    MESSAGE_TYPE_TRANSCRIPT: TranscriptMessage,
    MESSAGE_TYPE_AGENT_RESPONSE: AgentResponseMessage,
}


def parse_realtime_message(raw: str) -> Optional[RealtimeMessage]:
    """
    Parse a text frame from the realtime socket.

    Args:
        raw: The raw text frame

    Returns:
        A typed message for the event types that carry conversation text,
        or None for any other event type

    Raises:
        json.JSONDecodeError: If the frame is not valid JSON
        ValidationError: If a known event type is missing its text
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        return None

    model = _MESSAGE_MODELS.get(data.get("type"))
    if model is None:
        logger.debug(f"Ignoring realtime message of type: {data.get('type', 'unknown')}")
        return None
    return model(**data)


__all__ = [
    "AgentResponseMessage",
    "RealtimeMessage",
    "TranscriptMessage",
    "parse_realtime_message",
]
