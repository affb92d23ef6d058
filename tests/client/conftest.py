import asyncio
import json

from typing import Any

import pytest

from genai_live.client.errors import LiveConnectError, LiveSendError
from genai_live.client.transports.base import LiveTransport


class FakeTransport(LiveTransport):
    """In-memory transport: records writes and lets tests push frames."""

    def __init__(
        self,
        *,
        auto_ack: bool = True,
        fail_open: Exception | None = None,
    ) -> None:
        self.auto_ack = auto_ack
        self.fail_open = fail_open
        self.fail_write: Exception | None = None
        self.url: str | None = None
        self.headers: dict[str, str] | None = None
        self.written: list[Any] = []
        self.close_calls = 0
        self._open = False
        self._on_frame = None
        self._on_close = None

    @property
    def is_open(self) -> bool:
        return self._open

    def on_frame_received(self, callback, on_close=None) -> None:
        self._on_frame = callback
        self._on_close = on_close

    async def open_channel(self, url, headers=None) -> None:
        if self.fail_open is not None:
            raise self.fail_open
        self.url = url
        self.headers = dict(headers or {})
        self._open = True

    async def write_frame(self, frame) -> None:
        if not self._open:
            raise LiveSendError('Channel is not open')
        if self.fail_write is not None:
            raise self.fail_write
        message = json.loads(frame)
        self.written.append(message)
        if self.auto_ack and 'setup' in message:
            asyncio.get_running_loop().call_soon(
                self.deliver, {'setupComplete': {}}
            )

    async def close_channel(self) -> None:
        self.close_calls += 1
        if self._open:
            self._open = False
            if self._on_close:
                self._on_close(1000, '')

    def deliver(self, payload: Any) -> None:
        frame = payload if isinstance(payload, str | bytes) else json.dumps(
            payload
        )
        self._on_frame(frame)

    def remote_close(self, code: int = 1011, reason: str = 'boom') -> None:
        self._open = False
        self._on_close(code, reason)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def silent_transport() -> FakeTransport:
    return FakeTransport(auto_ack=False)


@pytest.fixture
def unreachable_transport() -> FakeTransport:
    return FakeTransport(fail_open=LiveConnectError('Network error: refused'))
