"""
WebSocket client for the managed real-time call session.

The socket is the call session. It is authenticated by the access token in
its URL (see ``with_access_token``); once it is open, microphone audio goes out
as binary frames and the platform's events come back as JSON text frames.
Closing the socket ends the call.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedError, ConnectionClosedOK

from voicechat.client.exceptions import RealtimeConnectionError
from voicechat.config.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

CONNECTION_TIMEOUT = 30  # seconds
SEND_TIMEOUT = 5.0  # seconds

# WebSocket configuration for streaming audio
WS_MAX_SIZE = 16 * 1024 * 1024
WS_PING_INTERVAL = 5

MessageHandler = Callable[[str], Awaitable[None]]
CloseHandler = Callable[[], Awaitable[None]]


def with_access_token(ws_url: str, access_token: str) -> str:
    """
    Add ``access_token`` to the socket URL's query string.

    Existing parameters such as ``call_id`` are kept.
    """
    parts = urlsplit(ws_url)
    query = [(k, v) for k, v in parse_qsl(parts.query) if k != "access_token"]
    query.append(("access_token", access_token))
    return urlunsplit(parts._replace(query=urlencode(query)))


class RealtimeCallClient:
    """
    Client for a single real-time call socket.

    Args:
        url: Authenticated socket URL for the call
        on_message: Coroutine called with every text frame received
        on_close: Coroutine called once when the socket closes on its own
    """

    def __init__(
        self,
        url: str,
        on_message: Optional[MessageHandler] = None,
        on_close: Optional[CloseHandler] = None,
    ):
        self.url = url
        self.on_message = on_message
        self.on_close = on_close
        self.ws = None
        self._recv_task: Optional[asyncio.Task] = None
        self._is_closing = False

    @property
    def is_open(self) -> bool:
        return self.ws is not None and not self._is_closing

    async def connect(self) -> None:
        """
        Open the call socket.

        Raises:
            RealtimeConnectionError: If the socket cannot be opened in time
        """
        try:
            self.ws = await asyncio.wait_for(
                websockets.connect(
                    self.url,
                    max_size=WS_MAX_SIZE,
                    ping_interval=WS_PING_INTERVAL,
                    ping_timeout=10,
                    compression=None,
                ),
                timeout=CONNECTION_TIMEOUT,
            )
        except asyncio.TimeoutError as e:
            raise RealtimeConnectionError(
                f"Timeout while connecting to call socket (after {CONNECTION_TIMEOUT}s)"
            ) from e
        except (OSError, websockets.exceptions.WebSocketException) as e:
            raise RealtimeConnectionError(f"Failed to connect to call socket: {e}") from e

        self._is_closing = False
        logger.info("WebSocket connected successfully")

    async def start_call(self) -> None:
        """Begin receiving call events on the open socket."""
        if not self.ws:
            raise RealtimeConnectionError("Cannot start call: socket is not connected")
        if self._recv_task and not self._recv_task.done():
            logger.warning("Call already started")
            return

        self._recv_task = asyncio.create_task(self._recv_loop())
        logger.info("Call session started")

    async def send_audio(self, chunk: bytes) -> bool:
        """
        Send one audio chunk as a binary frame.

        Returns:
            bool: True if the chunk was sent, False if the socket is not open
            or the send failed
        """
        if not chunk or not self.is_open:
            return False

        try:
            await asyncio.wait_for(self.ws.send(chunk), timeout=SEND_TIMEOUT)
            logger.debug(f"Audio data sent: {len(chunk)} bytes")
            return True
        except asyncio.TimeoutError:
            logger.warning("Timeout while sending audio chunk")
            return False
        except ConnectionClosed as e:
            logger.warning(f"Connection closed while sending audio: {e}")
            return False
        except Exception as e:
            logger.error(f"Error sending audio: {e}")
            return False

    async def _recv_loop(self) -> None:
        try:
            async for message in self.ws:
                if isinstance(message, bytes):
                    logger.debug(f"Ignoring binary frame of {len(message)} bytes")
                    continue

                logger.debug(f"Raw WebSocket message: {message[:200]}")
                if self.on_message:
                    try:
                        await self.on_message(message)
                    except Exception as e:
                        logger.error(f"Error processing message: {e}", exc_info=True)
        except ConnectionClosedOK:
            logger.info("WebSocket closed normally")
        except ConnectionClosedError as e:
            logger.warning(f"WebSocket closed with error: code={e.code}, reason={e.reason}")
        finally:
            if not self._is_closing:
                self.ws = None
                if self.on_close:
                    await self.on_close()

    async def close(self) -> None:
        """End the call: close the socket and cancel the receive task."""
        self._is_closing = True

        if self.ws:
            try:
                await self.ws.close()
            except Exception as e:
                logger.warning(f"Error closing WebSocket: {e}")
            self.ws = None

        if (
            self._recv_task
            and not self._recv_task.done()
            and self._recv_task is not asyncio.current_task()
        ):
            self._recv_task.cancel()
            try:
                await self._recv_task
            except asyncio.CancelledError:
                pass
        self._recv_task = None
        logger.info("WebSocket closed")
