"""
Client-side components of the voice chat application.

Key components:
- audio_capture: PyAudio microphone recorder delivering 100ms PCM chunks
- realtime_call: WebSocket client for the managed real-time call session
- voice_chat_controller: Orchestrates setup, streaming, live transcript and
  the finalized transcript after hangup

Usage examples:
```python
from voicechat.client.voice_chat_controller import VoiceChatController
from voicechat.services.session_client import SessionClient

async def talk():
    async with VoiceChatController(SessionClient("http://localhost:8000")) as chat:
        await chat.start_conversation("You are the head chef...")
        await asyncio.sleep(30)
        await chat.hang_up()
        for entry in chat.transcript:
            print(entry.role, entry.text)
```
"""

# Client module initialization
