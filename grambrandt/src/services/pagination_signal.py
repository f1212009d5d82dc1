"""
Infinite scroll trigger.

The page puts a sentinel element after the last post. When it scrolls into
view the browser asks for more posts, and the feed fires this signal. The
signal is disarmed as it fires and only re-armed once the batch has been
rendered, so a second trigger while a batch is loading does nothing.
"""

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class PaginationSignal(Generic[T]):
    def __init__(self, callback: Callable[[], T]):
        self._callback = callback
        self._armed = False
        self._lock = threading.Lock()

    @property
    def is_armed(self) -> bool:
        return self._armed

    def arm(self) -> None:
        with self._lock:
            self._armed = True

    def disarm(self) -> None:
        with self._lock:
            self._armed = False

    def fire(self) -> Optional[T]:
        """Run the callback if armed. Returns None when the signal was not armed."""
        with self._lock:
            if not self._armed:
                return None
            self._armed = False
        return self._callback()
