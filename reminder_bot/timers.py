"""Deferred-callback capability used by the reminder scheduler.

The scheduler only needs to arm a one-shot callback and to cancel it before it
runs, so it depends on the TimerBackend protocol rather than on a particular
event loop. Production sessions use AsyncioTimers; tests drive a virtual clock.
"""

import asyncio
import logging
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerBackend(Protocol):
    """Protocol for one-shot deferred callbacks."""

    def arm(self, delay: float, callback: Callable[[], None]) -> Any:
        """Run callback after delay seconds.

        Returns:
            Opaque token accepted by cancel()
        """
        ...

    def cancel(self, token: Any) -> None:
        """Prevent a still-pending callback from running.

        Cancelling a token whose callback already ran is a no-op.
        """
        ...


class AsyncioTimers:
    """TimerBackend on top of an asyncio event loop.

    Callbacks run on the loop thread, so they never interleave with a
    coroutine step of the session that owns them.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop or asyncio.get_running_loop()

    def arm(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(delay, 0), callback)

    def cancel(self, token: asyncio.TimerHandle) -> None:
        token.cancel()
