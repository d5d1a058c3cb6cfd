"""
Configuration module for the voice chat application.

This module provides centralized configuration management for both the
session-setup server and the voice-chat client.

Key components:
- constants: Application-wide constants such as the logger name, Retell
  defaults, audio capture parameters and realtime message types.
- settings: Environment-based settings, loaded from a .env file when present.
- logging_config: Console and rotating-file logging for the application logger.

Usage examples:
```python
from voicechat.config.constants import LOGGER_NAME, AUDIO_SAMPLE_RATE
from voicechat.config.settings import get_settings
from voicechat.config.logging_config import configure_logging

logger = configure_logging()
settings = get_settings()
logger.info(f"Talking to {settings.server_url}")
```
"""

# Config module initialization
