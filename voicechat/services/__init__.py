"""
Services module for external API integrations in the voice chat application.

Key components:
- retell_service: Server-side facade over the Retell SDK that creates the LLM,
  agent and web call for a conversation and retrieves call resources.
- session_client: Client-side HTTP client for the /session-setup endpoints,
  used by the voice-chat controller.

Usage examples:
```python
from voicechat.services.session_client import SessionClient

async def new_call():
    client = SessionClient("http://localhost:8000")
    session = await client.create_session("You are the head chef...")
    print(session.wsUrl, session.call_id)
```
"""

# Services module initialization
