"""
Environment-based settings for the server and the voice-chat client.

Values are read from the process environment, after loading a ``.env`` file
from the working directory when one exists.
"""

import os
from dataclasses import dataclass
from pathlib import Path

import dotenv

from voicechat.config.constants import (
    DEFAULT_SERVER_URL,
    DEFAULT_SESSION_SETTLE_DELAY,
    DEFAULT_TRANSCRIPT_POLL_ATTEMPTS,
    DEFAULT_TRANSCRIPT_POLL_INTERVAL,
    DEFAULT_VOICE_ID,
    DEFAULT_WS_BASE_URL,
)

env_path = Path(".") / ".env"
if env_path.exists():
    dotenv.load_dotenv(env_path)


@dataclass
class Settings:
    """Snapshot of the environment configuration."""

    retell_api_key: str = ""
    voice_id: str = DEFAULT_VOICE_ID
    ws_base_url: str = DEFAULT_WS_BASE_URL
    host: str = "0.0.0.0"
    port: int = 8000
    server_url: str = DEFAULT_SERVER_URL
    session_settle_delay: float = DEFAULT_SESSION_SETTLE_DELAY
    transcript_poll_attempts: int = DEFAULT_TRANSCRIPT_POLL_ATTEMPTS
    transcript_poll_interval: float = DEFAULT_TRANSCRIPT_POLL_INTERVAL

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            retell_api_key=os.getenv("RETELL_API_KEY", ""),
            voice_id=os.getenv("RETELL_VOICE_ID", DEFAULT_VOICE_ID),
            ws_base_url=os.getenv("RETELL_WS_BASE_URL", DEFAULT_WS_BASE_URL),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            server_url=os.getenv("VOICECHAT_SERVER_URL", DEFAULT_SERVER_URL),
            session_settle_delay=float(
                os.getenv("SESSION_SETTLE_DELAY", str(DEFAULT_SESSION_SETTLE_DELAY))
            ),
            transcript_poll_attempts=int(
                os.getenv("TRANSCRIPT_POLL_ATTEMPTS", str(DEFAULT_TRANSCRIPT_POLL_ATTEMPTS))
            ),
            transcript_poll_interval=float(
                os.getenv("TRANSCRIPT_POLL_INTERVAL", str(DEFAULT_TRANSCRIPT_POLL_INTERVAL))
            ),
        )


def get_settings() -> Settings:
    """Read the current settings from the environment."""
    return Settings.from_env()
