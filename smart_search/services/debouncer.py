# smart_search/services/debouncer.py

import asyncio
import logging
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Propagates a value only after it has been stable for ``delay`` seconds.

    Every ``set`` restarts the timer and drops whatever was pending. Runs on
    the event loop's timer, so all calls must come from the loop thread.
    """

    def __init__(
        self,
        initial_value: T,
        delay: float = 0.5,
        on_change: Optional[Callable[[T], None]] = None,
    ):
        self.delay = delay
        self.on_change = on_change
        self._value = initial_value
        self._pending_value: Optional[T] = None
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def value(self) -> T:
        return self._value

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def set(self, value: T) -> None:
        self.cancel()
        self._pending_value = value
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending_value = None

    def _fire(self) -> None:
        self._handle = None
        value, self._pending_value = self._pending_value, None
        self._value = value
        logger.debug("Debounced value propagated: %r", value)
        if self.on_change is not None:
            self.on_change(value)
