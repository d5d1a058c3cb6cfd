"""
Constants and configuration values used throughout the application.

This module defines constants that are used across different parts of the application,
providing a centralized location for configuration values and making it easier to
maintain consistent naming throughout the codebase.
"""

# Logger name used throughout the application
LOGGER_NAME = "voice_chat"

# Retell defaults
DEFAULT_VOICE_ID = "11labs-Adrian"
DEFAULT_WS_BASE_URL = "wss://api.retellai.com/websocket"
RESPONSE_ENGINE_RETELL_LLM = "retell-llm"

# Local server defaults
DEFAULT_SERVER_URL = "http://localhost:8000"
SESSION_SETUP_PATH = "/session-setup"

# Microphone capture: mono 16 kHz 16-bit PCM, one chunk every 100ms
AUDIO_SAMPLE_RATE = 16000
AUDIO_CHANNELS = 1
AUDIO_SAMPLE_WIDTH = 2
AUDIO_TIMESLICE_MS = 100

# Delay between session setup and opening the socket
DEFAULT_SESSION_SETTLE_DELAY = 1.0  # seconds

# Finalized transcript polling after hangup
DEFAULT_TRANSCRIPT_POLL_ATTEMPTS = 10
DEFAULT_TRANSCRIPT_POLL_INTERVAL = 2.0  # seconds

# Incoming realtime message types
MESSAGE_TYPE_TRANSCRIPT = "transcript"
MESSAGE_TYPE_AGENT_RESPONSE = "agent_response"

# Transcript roles
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
