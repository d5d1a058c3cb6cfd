"""
Retell SDK wrapper used by the session-setup endpoints.

This module creates the three vendor resources a browser-style web call needs
(an LLM, an agent bound to it, and the web call itself) and retrieves call
resources so the client can pick up the finalized transcript after hangup.
It is a pass-through: all conversational behavior lives in the vendor platform.
"""

import logging
from typing import Any, Dict, Optional

from retell import AsyncRetell

from voicechat.config.constants import LOGGER_NAME, RESPONSE_ENGINE_RETELL_LLM
from voicechat.config.settings import Settings, get_settings
from voicechat.models.session_schemas import SessionSetupResponse

logger = logging.getLogger(LOGGER_NAME)


def _to_dict(resource: Any) -> Dict[str, Any]:
    """Convert an SDK response model into a JSON-safe dict."""
    if isinstance(resource, dict):
        return resource
    return resource.model_dump(mode="json", exclude_none=True)


class RetellService:
    """
    Thin facade over the async Retell client.

    Args:
        client: The Retell SDK client
        voice_id: Voice used for newly created agents
        ws_base_url: Base of the realtime signaling URL handed to the client
    """

    def __init__(self, client: AsyncRetell, voice_id: str, ws_base_url: str):
        self.client = client
        self.voice_id = voice_id
        self.ws_base_url = ws_base_url

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RetellService":
        settings = settings or get_settings()
        if not settings.retell_api_key:
            logger.warning("RETELL_API_KEY is not set; vendor calls will fail")
        return cls(
            AsyncRetell(api_key=settings.retell_api_key),
            voice_id=settings.voice_id,
            ws_base_url=settings.ws_base_url,
        )

    def build_ws_url(self, call_id: str) -> str:
        return f"{self.ws_base_url}?call_id={call_id}"

    async def create_session(self, system_prompt: str) -> SessionSetupResponse:
        """
        Create the LLM, agent and web call for a new conversation.

        Args:
            system_prompt: General prompt for the agent's LLM

        Returns:
            The created resources plus the socket URL and access token
        """
        llm = await self.client.llm.create(general_prompt=system_prompt)
        logger.info(f"LLM created: {llm.llm_id}")

        agent = await self.client.agent.create(
            response_engine={
                "type": RESPONSE_ENGINE_RETELL_LLM,
                "llm_id": llm.llm_id,
            },
            voice_id=self.voice_id,
        )
        logger.info(f"Agent created: {agent.agent_id}")

        web_call = await self.client.call.create_web_call(agent_id=agent.agent_id)
        logger.info(f"Web call created: {web_call.call_id}")

        return SessionSetupResponse(
            llm=_to_dict(llm),
            agent=_to_dict(agent),
            webCall=_to_dict(web_call),
            wsUrl=self.build_ws_url(web_call.call_id),
            accessToken=web_call.access_token,
        )

    async def get_call(self, call_id: str) -> Dict[str, Any]:
        """
        Retrieve a call resource.

        The ``transcript`` field is only populated once the vendor has
        finished post-processing the call.
        """
        call = await self.client.call.retrieve(call_id)
        logger.debug(f"Retrieved call {call_id} with status: {getattr(call, 'call_status', None)}")
        return _to_dict(call)
