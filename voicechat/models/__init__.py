"""
Models module for data structures used by the voice chat application.

Key components:
- session_schemas: Pydantic models for the /session-setup HTTP contract
  (request, response, error body and the call snapshot used to fetch the
  finalized transcript).
- realtime_messages: Typed events received over the realtime call socket.
- transcript: Transcript entries and the parser for the finalized transcript.

Usage examples:
```python
from voicechat.models import SessionSetupRequest, split_finalized_transcript

request = SessionSetupRequest(systemPrompt="You are the head chef...")
entries = split_finalized_transcript("Agent: Hello\\nUser: Hi")
```
"""

from voicechat.models.realtime_messages import (
    AgentResponseMessage,
    RealtimeMessage,
    TranscriptMessage,
    parse_realtime_message,
)
from voicechat.models.session_schemas import (
    CallSnapshot,
    SessionErrorResponse,
    SessionSetupRequest,
    SessionSetupResponse,
)
from voicechat.models.transcript import TranscriptEntry, split_finalized_transcript

__all__ = [
    "AgentResponseMessage",
    "CallSnapshot",
    "RealtimeMessage",
    "SessionErrorResponse",
    "SessionSetupRequest",
    "SessionSetupResponse",
    "TranscriptEntry",
    "TranscriptMessage",
    "parse_realtime_message",
    "split_finalized_transcript",
]
