"""
Unit tests for the Retell SDK facade.

The SDK client is replaced with mocks; these tests check the order of vendor
calls and the shape of the session-setup response built from them.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from voicechat.config.settings import Settings
from voicechat.services.retell_service import RetellService


def sdk_model(**fields):
    """Mimic an SDK response model: attributes plus model_dump()."""
    model = MagicMock(**fields)
    model.model_dump.return_value = dict(fields)
    return model


@pytest.fixture
def retell_client():
    client = MagicMock()
    client.llm.create = AsyncMock(return_value=sdk_model(llm_id="llm_1"))
    client.agent.create = AsyncMock(return_value=sdk_model(agent_id="agent_1"))
    client.call.create_web_call = AsyncMock(
        return_value=sdk_model(call_id="call_1", access_token="tok_1")
    )
    client.call.retrieve = AsyncMock(
        return_value=sdk_model(call_id="call_1", call_status="ended", transcript="Agent: Hi\n")
    )
    return client


@pytest.fixture
def service(retell_client):
    return RetellService(
        retell_client,
        voice_id="11labs-Adrian",
        ws_base_url="wss://api.retellai.com/websocket",
    )


@pytest.mark.asyncio
async def test_create_session(service, retell_client):
    session = await service.create_session("You are the head chef")

    retell_client.llm.create.assert_awaited_once_with(general_prompt="You are the head chef")
    retell_client.agent.create.assert_awaited_once_with(
        response_engine={"type": "retell-llm", "llm_id": "llm_1"},
        voice_id="11labs-Adrian",
    )
    retell_client.call.create_web_call.assert_awaited_once_with(agent_id="agent_1")

    assert session.llm == {"llm_id": "llm_1"}
    assert session.agent == {"agent_id": "agent_1"}
    assert session.webCall == {"call_id": "call_1", "access_token": "tok_1"}
    assert session.wsUrl == "wss://api.retellai.com/websocket?call_id=call_1"
    assert session.accessToken == "tok_1"
    assert session.call_id == "call_1"


@pytest.mark.asyncio
async def test_create_session_stops_on_llm_failure(service, retell_client):
    retell_client.llm.create.side_effect = RuntimeError("quota exceeded")

    with pytest.raises(RuntimeError):
        await service.create_session("prompt")

    retell_client.agent.create.assert_not_called()
    retell_client.call.create_web_call.assert_not_called()


@pytest.mark.asyncio
async def test_get_call(service, retell_client):
    call = await service.get_call("call_1")

    retell_client.call.retrieve.assert_awaited_once_with("call_1")
    assert call["transcript"] == "Agent: Hi\n"


def test_build_ws_url(service):
    assert service.build_ws_url("abc") == "wss://api.retellai.com/websocket?call_id=abc"


def test_from_settings():
    settings = Settings(
        retell_api_key="key_test",
        voice_id="11labs-Myra",
        ws_base_url="wss://example.test/ws",
    )

    with patch("voicechat.services.retell_service.AsyncRetell") as mock_retell:
        service = RetellService.from_settings(settings)

    mock_retell.assert_called_once_with(api_key="key_test")
    assert service.client is mock_retell.return_value
    assert service.voice_id == "11labs-Myra"
    assert service.ws_base_url == "wss://example.test/ws"
