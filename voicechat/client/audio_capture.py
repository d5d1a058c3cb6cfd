"""
Microphone capture for the voice-chat client.

``MicrophoneRecorder`` reads 16-bit PCM from the default input device with
PyAudio and hands one chunk per timeslice to an async callback, the way a
browser MediaRecorder started with a timeslice delivers data events.
"""

import asyncio
import logging
import threading
from typing import Awaitable, Callable, Optional

import pyaudio

from voicechat.client.exceptions import AudioCaptureError
from voicechat.config.constants import (
    AUDIO_CHANNELS,
    AUDIO_SAMPLE_RATE,
    AUDIO_TIMESLICE_MS,
    LOGGER_NAME,
)

logger = logging.getLogger(LOGGER_NAME)

FORMAT = pyaudio.paInt16

READER_STOP_TIMEOUT = 1.0  # seconds
READ_JOIN_TIMEOUT = 2.0  # seconds

AudioDataHandler = Callable[[bytes], Awaitable[None]]


class MicrophoneRecorder:
    """Captures audio from the microphone in fixed timeslices."""

    def __init__(
        self,
        sample_rate: int = AUDIO_SAMPLE_RATE,
        channels: int = AUDIO_CHANNELS,
        timeslice_ms: int = AUDIO_TIMESLICE_MS,
    ):
        self.sample_rate = sample_rate
        self.channels = channels
        self.timeslice_ms = timeslice_ms
        self.frames_per_chunk = sample_rate * timeslice_ms // 1000
        self.p: Optional[pyaudio.PyAudio] = None
        self.stream = None
        self._reader_task: Optional[asyncio.Task] = None
        self._running = False
        # Held by the worker thread for the duration of each stream.read
        self._stream_lock = threading.Lock()

    @property
    def is_recording(self) -> bool:
        return self._running

    async def start(self, on_data: AudioDataHandler) -> None:
        """
        Open the microphone and start delivering chunks to ``on_data``.

        Raises:
            AudioCaptureError: If no input device can be opened
        """
        if self._running:
            logger.warning("Recorder already started")
            return

        self.p = pyaudio.PyAudio()
        try:
            self.stream = self.p.open(
                format=FORMAT,
                channels=self.channels,
                rate=self.sample_rate,
                input=True,
                frames_per_buffer=self.frames_per_chunk,
            )
        except OSError as e:
            self.p.terminate()
            self.p = None
            raise AudioCaptureError(f"Could not open microphone: {e}") from e

        self.stream.start_stream()
        self._running = True
        self._reader_task = asyncio.create_task(self._read_loop(on_data))
        logger.info(
            f"Started recording audio: {self.sample_rate}Hz, {self.channels} channel(s), "
            f"{self.timeslice_ms}ms chunks"
        )

    async def _read_loop(self, on_data: AudioDataHandler) -> None:
        while self._running:
            try:
                data = await asyncio.to_thread(self._read_chunk)
            except OSError as e:
                logger.error(f"Error reading from microphone: {e}")
                break

            if not self._running:
                break

            try:
                await on_data(data)
            except Exception as e:
                logger.error(f"Error handling audio chunk: {e}", exc_info=True)

    def _read_chunk(self) -> bytes:
        with self._stream_lock:
            if self.stream is None:
                return b""
            return self.stream.read(self.frames_per_chunk, exception_on_overflow=False)

    async def stop(self) -> None:
        """Stop recording and release the microphone. Safe to call twice."""
        self._running = False

        if self._reader_task:
            try:
                await asyncio.wait_for(self._reader_task, timeout=READER_STOP_TIMEOUT)
            except asyncio.TimeoutError:
                logger.warning("Microphone reader did not stop in time")
            self._reader_task = None

        # A cancelled reader can leave a read running on its worker thread
        acquired = await asyncio.to_thread(self._stream_lock.acquire, True, READ_JOIN_TIMEOUT)
        if not acquired:
            logger.error("Microphone read did not return; leaving the stream open")
            return

        try:
            if self.stream:
                self.stream.stop_stream()
                self.stream.close()
                self.stream = None
            if self.p:
                self.p.terminate()
                self.p = None
                logger.info("Microphone stopped")
        finally:
            self._stream_lock.release()
