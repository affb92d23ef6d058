from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from types import TracebackType

from typing_extensions import Self


Frame = str | bytes
FrameCallback = Callable[[Frame], None]
CloseCallback = Callable[[int | None, str], None]


class LiveTransport(ABC):
    """Abstract base class for a persistent bidirectional live channel."""

    async def __aenter__(self) -> Self:
        """Enters the async context manager, returning the transport itself."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exits the async context manager, ensuring close_channel() is called."""
        await self.close_channel()

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the channel is currently open for writing."""

    @abstractmethod
    async def open_channel(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> None:
        """Opens the channel and starts delivering inbound frames."""

    @abstractmethod
    async def write_frame(self, frame: Frame) -> None:
        """Writes a single frame to the channel."""

    @abstractmethod
    def on_frame_received(
        self,
        callback: FrameCallback,
        on_close: CloseCallback | None = None,
    ) -> None:
        """Registers the delivery callbacks.

        `callback` is invoked once per inbound frame from the transport's
        reader; it must not block. `on_close` is invoked once with the close
        code and reason when the channel terminates for any reason.
        """

    @abstractmethod
    async def close_channel(self) -> None:
        """Closes the channel. Calling it more than once is a no-op."""


TransportFactory = Callable[[], LiveTransport]
