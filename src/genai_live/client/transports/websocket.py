"""WebSocket transport for live sessions.

Wraps a `websockets` client connection. A background reader task pulls frames
off the socket and hands each one to the registered callback; writes go
straight to the connection. Transport failures surface as `LiveConnectError`
(while opening) or `LiveSendError` (while writing).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import ssl

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from websockets.asyncio.client import connect
from websockets.exceptions import (
    ConnectionClosed,
    InvalidHandshake,
    InvalidStatus,
    InvalidURI,
)

from genai_live.client.errors import (
    LiveClientInvalidStateError,
    LiveConnectError,
    LiveSendError,
)
from genai_live.client.transports.base import (
    CloseCallback,
    Frame,
    FrameCallback,
    LiveTransport,
)


if TYPE_CHECKING:
    from websockets.asyncio.client import ClientConnection


logger = logging.getLogger(__name__)

DEFAULT_OPEN_TIMEOUT = 60.0
DEFAULT_CLOSE_TIMEOUT = 2.0


class WebSocketTransport(LiveTransport):
    """A `websockets`-based transport for the live client."""

    def __init__(
        self,
        *,
        open_timeout: float = DEFAULT_OPEN_TIMEOUT,
        close_timeout: float = DEFAULT_CLOSE_TIMEOUT,
        max_size: int | None = None,
        ssl_context: ssl.SSLContext | None = None,
    ) -> None:
        self.open_timeout = open_timeout
        self.close_timeout = close_timeout
        self.max_size = max_size
        self.ssl_context = ssl_context
        self._connection: ClientConnection | None = None
        self._reader_task: asyncio.Task[None] | None = None
        self._on_frame: FrameCallback | None = None
        self._on_close: CloseCallback | None = None
        self._closed = False
        self._close_notified = False

    @property
    def is_open(self) -> bool:
        return self._connection is not None and not self._closed

    def on_frame_received(
        self,
        callback: FrameCallback,
        on_close: CloseCallback | None = None,
    ) -> None:
        self._on_frame = callback
        self._on_close = on_close

    async def open_channel(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> None:
        """Connects to `url` and starts the reader task.

        Raises:
            LiveConnectError: If the handshake fails, is rejected, or does not
                complete within `open_timeout`.
            LiveClientInvalidStateError: If the channel was already opened.
        """
        if self._connection is not None or self._closed:
            raise LiveClientInvalidStateError('Channel already opened')
        logger.debug('Opening live channel to %s', _redact(url))
        kwargs: dict[str, Any] = {}
        if self.ssl_context is not None:
            kwargs['ssl'] = self.ssl_context
        try:
            self._connection = await connect(
                url,
                additional_headers=dict(headers) if headers else None,
                open_timeout=self.open_timeout,
                close_timeout=self.close_timeout,
                max_size=self.max_size,
                **kwargs,
            )
        except InvalidURI as e:
            raise LiveConnectError(f'Invalid endpoint: {e}') from e
        except InvalidStatus as e:
            status = e.response.status_code
            if status in (401, 403):
                raise LiveConnectError(
                    f'Authentication rejected (HTTP {status})'
                ) from e
            raise LiveConnectError(f'Handshake rejected (HTTP {status})') from e
        except InvalidHandshake as e:
            raise LiveConnectError(f'Handshake failed: {e}') from e
        except asyncio.TimeoutError as e:
            raise LiveConnectError('Timed out opening channel') from e
        except OSError as e:
            raise LiveConnectError(f'Network error: {e}') from e
        logger.info('Live channel opened: %s', _redact(url))
        self._reader_task = asyncio.create_task(self._reader_loop())

    async def _reader_loop(self) -> None:
        """Dispatches every inbound frame to the registered callback."""
        connection = self._connection
        if connection is None:
            return
        try:
            async for message in connection:
                self._dispatch(message)
        except ConnectionClosed as e:
            logger.debug('Live channel closed with error: %s', e)
        except OSError as e:
            logger.debug('Reader loop interrupted: %s', e)
        finally:
            self._notify_closed(connection.close_code, connection.close_reason)

    def _dispatch(self, frame: Frame) -> None:
        if isinstance(frame, bytes):
            logger.debug('Received binary frame of size: %d', len(frame))
        else:
            logger.debug('Received text frame of size: %d', len(frame))
        if self._on_frame is None:
            logger.debug('No frame callback registered; dropping frame')
            return
        try:
            self._on_frame(frame)
        except Exception:
            # The reader must keep running whatever the callback does.
            logger.exception('Frame callback raised')

    def _notify_closed(self, code: int | None, reason: str | None) -> None:
        self._closed = True
        if self._close_notified:
            return
        self._close_notified = True
        logger.info('Live channel closed: code=%s reason=%r', code, reason)
        if self._on_close is not None:
            try:
                self._on_close(code, reason or '')
            except Exception:
                logger.exception('Close callback raised')

    async def write_frame(self, frame: Frame) -> None:
        """Writes one frame.

        Raises:
            LiveSendError: If the channel is not open or the write fails.
        """
        connection = self._connection
        if connection is None or self._closed:
            raise LiveSendError('Channel is not open')
        try:
            await connection.send(frame)
        except ConnectionClosed as e:
            raise LiveSendError(f'Channel closed during write: {e}') from e
        except OSError as e:
            raise LiveSendError(f'Network error: {e}') from e
        logger.debug('Sent frame of size: %d', len(frame))

    async def close_channel(self) -> None:
        """Closes the connection and stops the reader task."""
        if self._closed and self._reader_task is None:
            return
        self._closed = True
        connection = self._connection
        if connection is not None:
            with contextlib.suppress(ConnectionClosed, OSError):
                await connection.close()
        if self._reader_task is not None:
            reader_task, self._reader_task = self._reader_task, None
            try:
                await asyncio.wait_for(reader_task, timeout=self.close_timeout)
            except asyncio.TimeoutError:
                reader_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await reader_task
            except asyncio.CancelledError:
                # Swallow only the reader's own cancellation.
                if not reader_task.cancelled():
                    raise
        if connection is not None:
            self._notify_closed(connection.close_code, connection.close_reason)


def _redact(url: str) -> str:
    """Strips query parameters, which may carry credentials, from a URL."""
    return url.split('?', 1)[0]
