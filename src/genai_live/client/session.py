"""Live session over a single persistent streaming channel.

A `LiveSession` owns one transport channel. `connect()` opens it and sends the
setup frame; afterwards each turn is `send_turn()` followed by
`await_response()`. The transport's reader task feeds inbound frames to
`_on_frame`, which parses them and signals the session's `TurnRendezvous`
according to the requested response modalities:

 - TEXT: every text part is a fragment.
 - AUDIO: every inline audio blob is appended to the session-wide audio
   accumulator and counts as a fragment.

Only one turn may be in flight at a time.
"""

from __future__ import annotations

import asyncio
import logging

from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType

from typing_extensions import Self

from genai_live.client.errors import (
    LiveClientInvalidStateError,
    LiveConnectError,
    LiveSendError,
)
from genai_live.client.frames import (
    create_media_frame,
    create_setup_frame,
    create_text_turn_frame,
)
from genai_live.client.rendezvous import TurnRendezvous
from genai_live.client.responses import (
    ParsedResponse,
    RawText,
    parse_server_frame,
)
from genai_live.client.transports.base import Frame, LiveTransport
from genai_live.client.transports.websocket import WebSocketTransport
from genai_live.config import DEFAULT_AUDIO_FILE, DEFAULT_TIMEOUT
from genai_live.types import LiveConnectConfig
from genai_live.utils.media import read_audio_pcm, read_image, write_wav


logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """What arrived for one turn.

    An empty result with `timed_out` set is how a response timeout is
    reported; the session stays usable.
    """

    texts: list[str] = field(default_factory=list)
    media_bytes: int = 0
    timed_out: bool = False
    turn_complete: bool = False

    @property
    def text(self) -> str:
        return ''.join(self.texts)

    @property
    def is_empty(self) -> bool:
        return not self.texts and not self.media_bytes


class LiveSession:
    """A live session bound to one endpoint and one transport channel."""

    def __init__(
        self,
        endpoint: str,
        config: LiveConnectConfig | None = None,
        *,
        transport: LiveTransport | None = None,
        headers: dict[str, str] | None = None,
        model_path: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        audio_file: str | Path | None = DEFAULT_AUDIO_FILE,
    ) -> None:
        """Initializes the session without connecting.

        Args:
            endpoint: WebSocket URL of the live service.
            config: Setup configuration; defaults to text output.
            transport: Channel implementation; defaults to `WebSocketTransport`.
            headers: Extra headers for the connect request.
            model_path: Model name to put in the setup frame instead of
                `config.model`.
            timeout: Default seconds to wait for acknowledgements and responses.
            audio_file: Where accumulated audio is saved on close, or None to
                keep it in memory only.
        """
        self.endpoint = endpoint
        self.config = config or LiveConnectConfig()
        self.transport = transport or WebSocketTransport(open_timeout=timeout)
        self.headers = headers or {}
        self.model_path = model_path
        self.timeout = timeout
        self.audio_file = Path(audio_file) if audio_file else None
        self._rendezvous = TurnRendezvous()
        self._audio = bytearray()
        self._turn_media_bytes = 0
        self._connected = False
        self._setup_complete = False
        # Set on setupComplete or when the channel goes away.
        self._setup_done = asyncio.Event()
        self._closed = False
        self._released = False
        self._close_reason = ''

    @classmethod
    async def open(
        cls,
        endpoint: str,
        config: LiveConnectConfig | None = None,
        **kwargs,
    ) -> LiveSession:
        """Creates a session and connects it.

        Raises:
            LiveConnectError: If the channel cannot be opened or the setup
                frame is not acknowledged in time.
        """
        session = cls(endpoint, config, **kwargs)
        await session.connect()
        return session

    async def __aenter__(self) -> Self:
        if not self._connected:
            await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        """True once connected and until closed by either side."""
        return self._connected and not self._closed

    @property
    def close_reason(self) -> str:
        return self._close_reason

    async def connect(self) -> None:
        """Opens the channel, sends the setup frame and waits for its ack.

        Raises:
            LiveConnectError: On transport or authentication failure, or when
                no acknowledgement arrives within `timeout` seconds.
            LiveClientInvalidStateError: If called more than once.
        """
        if self._connected or self._released:
            raise LiveClientInvalidStateError('Session already connected')
        self.transport.on_frame_received(self._on_frame, self._on_channel_closed)
        await self.transport.open_channel(self.endpoint, self.headers)
        self._connected = True

        try:
            await self.transport.write_frame(
                create_setup_frame(self.config, model_path=self.model_path)
            )
        except LiveSendError as e:
            await self.close()
            raise LiveConnectError(f'Failed to send setup: {e.message}') from e

        try:
            await asyncio.wait_for(self._setup_done.wait(), self.timeout)
            acknowledged = True
        except asyncio.TimeoutError:
            acknowledged = False
        if not self._setup_complete:
            reason = self._close_reason
            await self.close()
            if not acknowledged:
                raise LiveConnectError(
                    f'No setup acknowledgement within {self.timeout}s'
                )
            raise LiveConnectError(
                f'Channel closed before setup acknowledgement: {reason}'
            )
        logger.info('Live session ready (model=%s)', self.config.model)

    async def send_turn(self, frame: Frame) -> None:
        """Arms the rendezvous and writes one turn frame.

        Raises:
            LiveSendError: If the session is closed or the write fails.
            LiveClientInvalidStateError: If the session was never connected.
        """
        if not self._connected and not self._released:
            raise LiveClientInvalidStateError('Session is not connected')
        if not self.is_open:
            raise LiveSendError('Session is closed')
        self._turn_media_bytes = 0
        self._rendezvous.arm()
        await self.transport.write_frame(frame)

    async def send_text(self, text: str) -> None:
        """Sends a user text turn."""
        await self.send_turn(create_text_turn_frame(text))

    async def send_media(self, data: bytes, mime_type: str) -> None:
        """Sends a realtime media chunk with the given content type."""
        await self.send_turn(create_media_frame(data, mime_type))

    async def send_image(self, path: str | Path) -> None:
        """Reads an image file and sends it as a media turn."""
        data, mime_type = read_image(path)
        logger.info('Sending image: %s', Path(path).name)
        await self.send_media(data, mime_type)

    async def send_audio(self, path: str | Path) -> None:
        """Reads a 16-bit PCM audio file and sends it as a media turn."""
        data, mime_type = read_audio_pcm(path)
        logger.info('Sending audio input: %s', Path(path).name)
        await self.send_media(data, mime_type)

    async def await_response(
        self,
        timeout: float | None = None,
        *,
        until_turn_complete: bool = False,
    ) -> TurnResult:
        """Waits for the response to the turn sent last.

        Args:
            timeout: Seconds to wait; defaults to the session timeout.
            until_turn_complete: Keep collecting fragments until the server
                marks the turn complete, instead of returning on the first
                fragment.

        Returns:
            The fragments observed since the turn was sent. On timeout the
            result is marked `timed_out` and holds whatever arrived.
        """
        timeout = self.timeout if timeout is None else timeout
        if until_turn_complete:
            signaled = await self._rendezvous.wait_complete(timeout)
        else:
            signaled = await self._rendezvous.wait(timeout)
        if not signaled:
            logger.warning('No response within %ss', timeout)
        return TurnResult(
            texts=[f for f in self._rendezvous.fragments if isinstance(f, str)],
            media_bytes=self._turn_media_bytes,
            timed_out=not signaled,
            turn_complete=self._rendezvous.completed and not self._closed,
        )

    async def ask(
        self, text: str, timeout: float | None = None
    ) -> TurnResult:
        """Sends a text turn and collects the full response."""
        await self.send_text(text)
        return await self.await_response(timeout, until_turn_complete=True)

    def audio_bytes(self) -> bytes:
        """Returns all audio received during the session.

        Raises:
            LiveClientInvalidStateError: If the session is still open.
        """
        if not self._released:
            raise LiveClientInvalidStateError(
                'Audio output is only available after close()'
            )
        return bytes(self._audio)

    async def close(self) -> None:
        """Closes the channel and saves accumulated audio. Idempotent."""
        if self._released:
            return
        self._released = True
        self._closed = True
        try:
            await self.transport.close_channel()
        finally:
            self._rendezvous.release()
        if self._audio and self.audio_file is not None:
            try:
                write_wav(self.audio_file, bytes(self._audio))
            except OSError:
                logger.exception(
                    'Error saving audio data to %s', self.audio_file
                )

    def _on_frame(self, frame: Frame) -> None:
        response = parse_server_frame(frame)
        if isinstance(response, RawText):
            logger.info('Received text message: %s', response.text)
            if self.config.wants_text:
                self._rendezvous.signal(response.text)
            return
        self._handle_parsed(response)

    def _handle_parsed(self, response: ParsedResponse) -> None:
        if response.setup_complete:
            logger.debug('Setup acknowledged')
            self._setup_complete = True
            self._setup_done.set()
            return
        if not response.has_server_content:
            # Anything else (tool calls, go-away notices) is surfaced as text.
            logger.info('Received text message: %s', response.raw)
            if self.config.wants_text:
                self._rendezvous.signal(response.raw)
            return

        if self.config.wants_text:
            for text in response.texts:
                logger.info('Received message: %s', text)
                self._rendezvous.signal(text)
        if self.config.wants_audio:
            for blob in response.inline_data:
                if not blob.is_audio:
                    continue
                self._audio.extend(blob.data)
                self._turn_media_bytes += len(blob.data)
                self._rendezvous.signal()
        if response.turn_complete:
            self._rendezvous.complete()

    def _on_channel_closed(self, code: int | None, reason: str) -> None:
        self._closed = True
        self._close_reason = reason or f'code {code}'
        self._setup_done.set()
        self._rendezvous.release()
