"""
Pydantic models for the session-setup HTTP contract.

These models describe the request and response bodies of ``/session-setup``,
shared by the FastAPI server and the client that calls it. Field names follow
the JSON keys on the wire.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionSetupRequest(BaseModel):
    """Body of ``POST /session-setup``."""

    systemPrompt: str = Field(..., description="General prompt for the agent's LLM")


class SessionSetupResponse(BaseModel):
    """Connection credentials and the vendor resources created for a call."""

    llm: Dict[str, Any] = Field(..., description="Retell LLM resource")
    agent: Dict[str, Any] = Field(..., description="Retell agent resource")
    webCall: Dict[str, Any] = Field(..., description="Retell web call resource")
    wsUrl: str = Field(..., description="Realtime signaling URL for the call")
    accessToken: str = Field(..., description="Bearer token for the web call")

    @property
    def call_id(self) -> Optional[str]:
        return self.webCall.get("call_id")


class SessionErrorResponse(BaseModel):
    """Body returned with a 500 when the vendor call fails."""

    error: str
    details: str


class CallSnapshot(BaseModel):
    """
    Call resource returned by ``GET /session-setup?callId=``.

    Only the fields the client reads are declared; the rest of the vendor's
    payload is preserved as extra attributes.
    """

    model_config = ConfigDict(extra="allow")

    call_id: Optional[str] = None
    call_status: Optional[str] = None
    transcript: Optional[str] = None

    @property
    def has_transcript(self) -> bool:
        return bool(self.transcript and self.transcript.strip())
