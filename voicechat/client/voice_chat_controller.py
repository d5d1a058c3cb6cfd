"""
Voice-chat controller: the real-time audio/transcript orchestration.

The controller drives one conversation at a time through its lifecycle:

1. Ask the session-setup server for a web call (LLM, agent, call, token)
2. Open the call socket and, once it is open, start the microphone and the
   managed call session
3. Forward each microphone chunk while the socket is open
4. Append ``transcript`` / ``agent_response`` events to the transcript
5. On hangup, tear everything down and poll for the finalized transcript,
   which replaces the live one once the platform has produced it

Front ends observe it through three callbacks: transcript changes, the
active flag, and user-facing alerts.
"""

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Callable, List, Optional

from pydantic import ValidationError

from voicechat.client.realtime_call import RealtimeCallClient, with_access_token
from voicechat.config.constants import LOGGER_NAME, ROLE_ASSISTANT, ROLE_USER
from voicechat.config.settings import Settings, get_settings
from voicechat.models.realtime_messages import AgentResponseMessage, parse_realtime_message
from voicechat.models.transcript import TranscriptEntry, split_finalized_transcript
from voicechat.services.session_client import SessionClient

if TYPE_CHECKING:
    from voicechat.client.audio_capture import MicrophoneRecorder

logger = logging.getLogger(LOGGER_NAME)

TranscriptObserver = Callable[[List[TranscriptEntry]], None]
StateObserver = Callable[[bool], None]
AlertHandler = Callable[[str], None]

CallClientFactory = Callable[..., RealtimeCallClient]


class VoiceChatController:
    """
    Orchestrates a single voice conversation with a hosted agent.

    Args:
        session_client: Client for the session-setup endpoints
        settings: Timing settings; read from the environment when omitted
        recorder: Microphone recorder; a default one is created when omitted
        call_client_factory: Builds the call socket client for a URL
        on_transcript: Called with the full transcript whenever it changes
        on_state_change: Called with the new active flag whenever it flips
        on_alert: Called with user-facing error messages
    """

    def __init__(
        self,
        session_client: SessionClient,
        settings: Optional[Settings] = None,
        recorder: Optional["MicrophoneRecorder"] = None,
        call_client_factory: CallClientFactory = RealtimeCallClient,
        on_transcript: Optional[TranscriptObserver] = None,
        on_state_change: Optional[StateObserver] = None,
        on_alert: Optional[AlertHandler] = None,
    ):
        self.session_client = session_client
        self.settings = settings or get_settings()
        if recorder is None:
            from voicechat.client.audio_capture import MicrophoneRecorder

            recorder = MicrophoneRecorder()
        self.recorder = recorder
        self.call_client_factory = call_client_factory
        self.on_transcript = on_transcript
        self.on_state_change = on_state_change
        self.on_alert = on_alert

        self.is_conversation_active = False
        self.transcript: List[TranscriptEntry] = []
        self.system_prompt = ""
        self.call_id: Optional[str] = None
        self.call_client: Optional[RealtimeCallClient] = None

    async def __aenter__(self) -> "VoiceChatController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop_conversation()

    # Observer plumbing

    def _alert(self, message: str) -> None:
        if self.on_alert:
            self.on_alert(message)
        else:
            logger.warning(f"Alert: {message}")

    def _set_active(self, active: bool) -> None:
        if self.is_conversation_active == active:
            return
        self.is_conversation_active = active
        if self.on_state_change:
            self.on_state_change(active)

    def _notify_transcript(self) -> None:
        if self.on_transcript:
            self.on_transcript(list(self.transcript))

    def append_entry(self, role: str, text: str) -> None:
        self.transcript.append(TranscriptEntry(role=role, text=text))
        self._notify_transcript()

    # Lifecycle

    async def start_conversation(self, system_prompt: Optional[str] = None) -> bool:
        """
        Start a conversation with the given system prompt.

        Returns:
            bool: True if the conversation is now active
        """
        if self.is_conversation_active:
            logger.warning("Conversation already active")
            return True

        if system_prompt is not None:
            self.system_prompt = system_prompt

        if not self.system_prompt or not self.system_prompt.strip():
            self._alert("Please enter a system prompt")
            return False

        try:
            await self.initialize_conversation()
            return True
        except Exception as e:
            logger.error(f"Error starting conversation: {e}", exc_info=True)
            self._alert(f"Failed to start conversation: {e}")
            await self.stop_conversation()
            return False

    async def initialize_conversation(self) -> None:
        """Set up the web call, open the socket and start streaming."""
        self.transcript = []
        self._notify_transcript()

        session = await self.session_client.create_session(self.system_prompt)
        self.call_id = session.call_id

        await asyncio.sleep(self.settings.session_settle_delay)

        url = with_access_token(session.wsUrl, session.accessToken)
        logger.info(f"Connecting to call socket for call: {self.call_id}")

        self.call_client = self.call_client_factory(
            url,
            on_message=self.handle_message,
            on_close=self._on_socket_closed,
        )
        await self.call_client.connect()
        await self._on_socket_open()

        self._set_active(True)

    async def _on_socket_open(self) -> None:
        await self.recorder.start(self._send_audio)
        await self.call_client.start_call()

    async def _send_audio(self, chunk: bytes) -> None:
        if len(chunk) > 0 and self.call_client is not None and self.call_client.is_open:
            await self.call_client.send_audio(chunk)

    async def _on_socket_closed(self) -> None:
        logger.info("Call socket closed by the remote side")
        self.call_client = None
        await self.stop_audio_recording()
        self._set_active(False)

    async def handle_message(self, raw: str) -> None:
        """Append conversation text from a socket event to the transcript."""
        try:
            message = parse_realtime_message(raw)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Error processing message: {e}")
            return

        if message is None:
            return

        logger.debug(f"Parsed WebSocket message: {message}")
        role = ROLE_ASSISTANT if isinstance(message, AgentResponseMessage) else ROLE_USER
        self.append_entry(role, message.text)

    async def stop_audio_recording(self) -> None:
        try:
            await self.recorder.stop()
        except Exception as e:
            logger.error(f"Error stopping microphone: {e}", exc_info=True)

    async def stop_conversation(self) -> None:
        """Stop the call, close the socket and release the microphone."""
        call_client, self.call_client = self.call_client, None
        if call_client:
            await call_client.close()

        await self.stop_audio_recording()
        self._set_active(False)

    async def hang_up(self) -> bool:
        """
        End the conversation and reconcile the finalized transcript.

        Returns:
            bool: True if the finalized transcript replaced the live one
        """
        await self.stop_conversation()
        return await self.finalize_transcript()

    async def finalize_transcript(self) -> bool:
        """
        Poll for the platform's finalized transcript and adopt it.

        Returns:
            bool: True if the finalized transcript replaced the live one
        """
        if not self.call_id:
            logger.warning("No call to finalize")
            return False

        attempts = self.settings.transcript_poll_attempts
        for attempt in range(1, attempts + 1):
            try:
                call = await self.session_client.get_call(self.call_id)
            except Exception as e:
                logger.warning(f"Error fetching call {self.call_id} (attempt {attempt}/{attempts}): {e}")
            else:
                if call.has_transcript:
                    entries = split_finalized_transcript(call.transcript)
                    if not entries:
                        logger.warning(
                            f"Finalized transcript for call {self.call_id} has no speaker turns; "
                            "keeping live transcript"
                        )
                        return False
                    self.transcript = entries
                    self._notify_transcript()
                    logger.info(f"Finalized transcript received with {len(entries)} entries")
                    return True
                logger.debug(f"Transcript not ready yet (attempt {attempt}/{attempts})")

            if attempt < attempts:
                await asyncio.sleep(self.settings.transcript_poll_interval)

        logger.warning(f"No finalized transcript for call {self.call_id}; keeping live transcript")
        return False
