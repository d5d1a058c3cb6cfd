import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from voicechat.config.settings import Settings
from voicechat.models.session_schemas import SessionSetupResponse


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    yield


@pytest.fixture
def session_response():
    """A session-setup response as returned by the server."""
    return SessionSetupResponse(
        llm={"llm_id": "llm_1", "general_prompt": "You are the head chef"},
        agent={"agent_id": "agent_1", "voice_id": "11labs-Adrian"},
        webCall={"call_id": "call_1", "access_token": "tok_1"},
        wsUrl="wss://api.retellai.com/websocket?call_id=call_1",
        accessToken="tok_1",
    )


@pytest.fixture
def fast_settings():
    """Settings without real waits."""
    return Settings(
        session_settle_delay=0,
        transcript_poll_attempts=3,
        transcript_poll_interval=0,
    )


@pytest.fixture
def mock_recorder():
    recorder = MagicMock()
    recorder.start = AsyncMock()
    recorder.stop = AsyncMock()
    return recorder


@pytest.fixture
def mock_call_client():
    call_client = MagicMock()
    call_client.connect = AsyncMock()
    call_client.start_call = AsyncMock()
    call_client.close = AsyncMock()
    call_client.send_audio = AsyncMock(return_value=True)
    call_client.is_open = True
    return call_client
