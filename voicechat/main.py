"""
FastAPI server for the Retell voice chat demo.

This module exposes the session-setup endpoints the voice-chat client calls.
``POST /session-setup`` creates the vendor resources for a new web call and
returns the socket URL and access token; ``GET /session-setup?callId=`` returns
the call resource so the client can collect the finalized transcript after
hangup. Both are pass-throughs to the Retell SDK.
"""

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse

from voicechat.config.constants import LOGGER_NAME, SESSION_SETUP_PATH
from voicechat.config.logging_config import configure_logging
from voicechat.config.settings import get_settings
from voicechat.models.session_schemas import (
    SessionErrorResponse,
    SessionSetupRequest,
    SessionSetupResponse,
)
from voicechat.services.retell_service import RetellService

configure_logging()
logger = logging.getLogger(LOGGER_NAME)

app = FastAPI(
    title="Retell Voice Chat",
    description="Session setup for browser-style voice calls with a Retell agent",
    version="1.0.0",
)


@lru_cache()
def get_retell_service() -> RetellService:
    """Create the Retell facade once per process."""
    return RetellService.from_settings()


def _error(message: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=SessionErrorResponse(error=message, details=str(exc)).model_dump(),
    )


@app.post(SESSION_SETUP_PATH, response_model=SessionSetupResponse)
async def create_session(
    request: SessionSetupRequest,
    retell: RetellService = Depends(get_retell_service),
):
    """Create an LLM, an agent and a web call, and return connection credentials.

    Returns:
        SessionSetupResponse: The created resources, the realtime socket URL
        and the web call's access token, or a 500 error body.
    """
    try:
        session = await retell.create_session(request.systemPrompt)
        logger.info(f"Session created for call: {session.call_id}")
        return session
    except Exception as e:
        logger.error(f"Error creating session: {e}", exc_info=True)
        return _error("Failed to create session", e)


@app.get(SESSION_SETUP_PATH)
async def get_call(
    callId: str = Query(..., description="Identifier of the web call"),
    retell: RetellService = Depends(get_retell_service),
):
    """Return the call resource, including the finalized transcript once available."""
    try:
        return await retell.get_call(callId)
    except Exception as e:
        logger.error(f"Error retrieving call {callId}: {e}", exc_info=True)
        return _error("Failed to retrieve call", e)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring system status."""
    return {
        "status": "healthy",
        "retell_api_key_configured": bool(get_settings().retell_api_key),
    }


@app.get("/")
async def root():
    """Root endpoint to display basic information about the API."""
    return {
        "name": "Retell Voice Chat",
        "description": "Session setup for browser-style voice calls with a Retell agent",
        "version": "1.0.0",
        "endpoints": {
            SESSION_SETUP_PATH: "POST to create a call session, GET with callId to fetch a call",
            "/health": "Health check endpoint",
        },
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info(f"Starting server on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, http="h11")
