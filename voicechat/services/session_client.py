"""
HTTP client for the session-setup endpoints.

The voice-chat controller uses this client to obtain connection credentials
for a new call and, after hangup, to poll for the finalized transcript.
Requests are made with ``requests`` on a worker thread so the event loop
keeps serving the audio stream.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from voicechat.config.constants import LOGGER_NAME, SESSION_SETUP_PATH
from voicechat.models.session_schemas import CallSnapshot, SessionSetupResponse

logger = logging.getLogger(LOGGER_NAME)

REQUEST_TIMEOUT = 30  # seconds


class SessionSetupError(Exception):
    """Raised when the session-setup server answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: str = ""):
        super().__init__(f"{message}: {details}" if details else message)
        self.status_code = status_code
        self.details = details


class SessionClient:
    """
    Client for ``/session-setup``.

    Args:
        base_url: Root URL of the session-setup server
        session: Optional requests session, mainly for tests
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{SESSION_SETUP_PATH}"

    def _check(self, response: requests.Response, action: str) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            message = body.get("error") or f"Failed to {action}"
            details = str(body.get("details") or body.get("detail") or response.reason or "")
            logger.error(f"Session server error ({response.status_code}) during {action}: {details}")
            raise SessionSetupError(message, status_code=response.status_code, details=details)
        return body

    def _create_session(self, system_prompt: str) -> SessionSetupResponse:
        response = self.session.post(
            self.endpoint,
            json={"systemPrompt": system_prompt},
            timeout=REQUEST_TIMEOUT,
        )
        body = self._check(response, "create session")
        logger.debug(f"Full session-setup response: {body}")
        return SessionSetupResponse(**body)

    def _get_call(self, call_id: str) -> CallSnapshot:
        response = self.session.get(
            self.endpoint,
            params={"callId": call_id},
            timeout=REQUEST_TIMEOUT,
        )
        return CallSnapshot(**self._check(response, "retrieve call"))

    async def create_session(self, system_prompt: str) -> SessionSetupResponse:
        """Create a new call session for the given system prompt."""
        return await asyncio.to_thread(self._create_session, system_prompt)

    async def get_call(self, call_id: str) -> CallSnapshot:
        """Fetch the current state of a call, including any finalized transcript."""
        return await asyncio.to_thread(self._get_call, call_id)

    def close(self) -> None:
        self.session.close()
