"""Single-slot rendezvous between the transport reader and a waiting caller.

The reader task delivers frames whenever the remote side pushes them, possibly
several times per turn. The caller wants each turn to look like
request-then-response. `TurnRendezvous` bridges the two:

 - `arm()` opens the slot for a new turn and must run before the frame is
   written, so that a fast response cannot slip in ahead of the wait.
 - `signal()` is called from the reader for every accepted fragment; the
   first one after `arm()` releases the waiter.
 - `wait()` suspends until signaled or the timeout elapses.

Only one turn may be in flight at a time. A second `arm()` before the previous
turn was consumed is logged and resets the slot.
"""

from __future__ import annotations

import asyncio
import logging

from typing import Any


logger = logging.getLogger(__name__)


class TurnRendezvous:
    """Single producer / single consumer handoff for one in-flight turn."""

    def __init__(self) -> None:
        # Inert until the first arm(): waits return immediately.
        self._signaled = asyncio.Event()
        self._signaled.set()
        self._completed = asyncio.Event()
        self._completed.set()
        self._armed = False
        self._fragments: list[Any] = []

    @property
    def armed(self) -> bool:
        """True between `arm()` and the first signal."""
        return self._armed and not self._signaled.is_set()

    @property
    def signaled(self) -> bool:
        return self._signaled.is_set()

    @property
    def completed(self) -> bool:
        return self._completed.is_set()

    @property
    def fragments(self) -> list[Any]:
        """Fragments delivered since the most recent `arm()`."""
        return list(self._fragments)

    def arm(self) -> None:
        """Opens the slot for the next turn and drops stale fragments."""
        if self.armed:
            logger.warning(
                'Rendezvous re-armed before the previous turn was signaled; '
                'a late response may be attributed to the new turn'
            )
        self._fragments.clear()
        self._signaled.clear()
        self._completed.clear()
        self._armed = True

    def signal(self, fragment: Any = None) -> None:
        """Records a fragment (if any) and releases the waiter.

        Never suspends; safe to call from the transport's delivery path.
        """
        if fragment is not None:
            self._fragments.append(fragment)
        if not self._signaled.is_set():
            logger.debug('Rendezvous signaled')
        self._signaled.set()

    def complete(self) -> None:
        """Marks the remote turn as finished."""
        self._signaled.set()
        self._completed.set()

    def release(self) -> None:
        """Releases any waiter without delivering a fragment.

        Used when the channel goes away so the caller does not sit out the
        full timeout.
        """
        self._armed = False
        self._signaled.set()
        self._completed.set()

    async def wait(self, timeout: float | None = None) -> bool:
        """Waits until signaled.

        Args:
            timeout: Maximum number of seconds to wait, or None to wait
                indefinitely.

        Returns:
            True if the slot was signaled, False if the timeout elapsed.
        """
        return await self._wait_event(self._signaled, timeout)

    async def wait_complete(self, timeout: float | None = None) -> bool:
        """Waits until the remote marks the turn complete (or release)."""
        return await self._wait_event(self._completed, timeout)

    @staticmethod
    async def _wait_event(event: asyncio.Event, timeout: float | None) -> bool:
        if event.is_set():
            return True
        try:
            await asyncio.wait_for(event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True
