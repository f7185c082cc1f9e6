"""Realtime message stream over a websocket connection."""

import asyncio
import logging
from enum import Enum
from typing import AsyncIterator, Callable, Optional

import aiohttp

from therethen.core.config import STREAM_BACKLOG_SIZE
from therethen.core.session import AuthSession
from therethen.models.realtime import RealtimeMessage

logger = logging.getLogger(__name__)


class StreamState(Enum):
    """Connection state of the stream client."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class StreamClient:
    """Client for the realtime text-frame stream.

    Failures never propagate to the caller: they are logged and a lost
    connection shows up as the receive loop ending. There is no automatic
    reconnect; call connect() again to resume.
    """

    def __init__(
        self,
        url: str,
        on_message: Optional[Callable[[str], None]] = None,
        auth: Optional[AuthSession] = None,
        backlog_size: int = STREAM_BACKLOG_SIZE,
    ):
        """
        Initialize stream client.

        Args:
            url: Stream address (ws:// or wss://)
            on_message: Optional callback invoked once per inbound text frame
            auth: Optional session whose token is sent when connecting
            backlog_size: Frames kept for the first messages() reader, oldest
                dropped first
        """
        self.url = url
        self.on_message = on_message
        self.auth = auth
        self.backlog_size = backlog_size
        self.state = StreamState.DISCONNECTED
        self._session: Optional[aiohttp.ClientSession] = None
        self._ws: Optional[aiohttp.ClientWebSocketResponse] = None
        self._receive_task: Optional[asyncio.Task] = None
        self._pending_sends: set[asyncio.Task] = set()
        self._listeners: list[asyncio.Queue] = []
        self._backlog: Optional[asyncio.Queue] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.disconnect()

    @property
    def is_connected(self) -> bool:
        return self.state is StreamState.CONNECTED

    async def connect(self) -> bool:
        """
        Open the connection and start the receive loop.

        Returns:
            True once connected, False if the connection could not be opened
        """
        if self.state is not StreamState.DISCONNECTED:
            logger.warning(f"Stream already {self.state.value}: {self.url}")
            return self.is_connected

        if self._session is not None:
            # previous connection was lost; release it before reopening
            await self._release()

        self.state = StreamState.CONNECTING
        self._session = aiohttp.ClientSession()
        headers = self.auth.authorization_header() if self.auth else {}

        try:
            self._ws = await self._session.ws_connect(self.url, headers=headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Stream connect to {self.url} failed: {e!r}")
            await self._session.close()
            self._session = None
            self.state = StreamState.DISCONNECTED
            return False

        self.state = StreamState.CONNECTED
        self._listeners = []
        self._backlog = asyncio.Queue() if self.backlog_size > 0 else None
        if self._backlog is not None:
            self._listeners.append(self._backlog)
        self._receive_task = asyncio.create_task(self._receive_loop())
        logger.info(f"Stream connected: {self.url}")
        return True

    async def _receive_loop(self):
        """Deliver inbound text frames until the connection ends."""
        ws = self._ws
        try:
            async for msg in ws:
                if msg.type == aiohttp.WSMsgType.TEXT:
                    self._dispatch(msg.data)
                elif msg.type == aiohttp.WSMsgType.BINARY:
                    logger.debug(f"Ignoring binary frame ({len(msg.data)} bytes)")
                elif msg.type == aiohttp.WSMsgType.ERROR:
                    logger.error(f"Stream receive error: {ws.exception()!r}")
                    break
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Stream receive error: {e!r}")
        finally:
            self.state = StreamState.DISCONNECTED
            for queue in self._listeners:
                queue.put_nowait(None)
            logger.info(f"Stream receive loop ended: {self.url}")

    def _dispatch(self, text: str):
        if self.on_message:
            try:
                self.on_message(text)
            except Exception:
                logger.exception("Stream message callback failed")

        for queue in self._listeners:
            if queue is self._backlog and queue.qsize() >= self.backlog_size:
                queue.get_nowait()
            queue.put_nowait(text)

    def messages(self) -> AsyncIterator[str]:
        """
        Iterate over inbound text frames.

        The first call after connect() also receives the frames buffered since
        connecting (up to backlog_size). Later calls only see frames arriving
        after the call. Iteration ends when the receive loop ends.

        Returns:
            Async iterator over the raw text of each frame
        """
        if self._backlog is not None:
            queue, self._backlog = self._backlog, None
        else:
            queue = asyncio.Queue()
            if self.is_connected:
                self._listeners.append(queue)
            else:
                queue.put_nowait(None)
        return self._iterate(queue)

    async def _iterate(self, queue: asyncio.Queue) -> AsyncIterator[str]:
        try:
            while True:
                text = await queue.get()
                if text is None:
                    return
                yield text
        finally:
            if queue in self._listeners:
                self._listeners.remove(queue)

    def send(self, text: str):
        """
        Queue a text frame for sending.

        Fire-and-forget: errors are logged, never raised. Must be called from
        the event loop the client was connected on.

        Args:
            text: Frame payload
        """
        if self._ws is None or self._ws.closed:
            logger.warning("Cannot send, stream is not connected")
            return

        task = asyncio.ensure_future(self._send(self._ws, text))
        self._pending_sends.add(task)
        task.add_done_callback(self._pending_sends.discard)

    def send_message(self, message: RealtimeMessage):
        """Send a message envelope as a JSON text frame."""
        self.send(message.to_json())

    @staticmethod
    async def _send(ws: aiohttp.ClientWebSocketResponse, text: str):
        try:
            await ws.send_str(text)
        except (aiohttp.ClientError, ConnectionError, RuntimeError) as e:
            logger.error(f"Stream send error: {e!r}")

    async def disconnect(self):
        """Close the connection and stop the receive loop."""
        await self._release()
        self._backlog = None
        self.state = StreamState.DISCONNECTED
        logger.info(f"Stream disconnected: {self.url}")

    async def _release(self):
        """Flush pending sends, then close the websocket and its session."""
        if self._pending_sends:
            await asyncio.gather(*self._pending_sends, return_exceptions=True)

        if self._ws is not None:
            await self._ws.close()

        if self._receive_task is not None:
            await self._receive_task

        if self._session is not None:
            await self._session.close()

        self._ws = None
        self._receive_task = None
        self._session = None
