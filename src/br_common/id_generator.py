"""Sequential integer ID generator for orders and accounts.

Each OrderStore owns its own generators, so two stores (or two test fixtures)
never share a counter.
"""

import threading


class SequentialIdGenerator:
    """Monotonic integer IDs starting at ``start``.

    Assignment is serialized by a lock so IDs stay unique even if a store is
    ever shared across threads.
    """

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError("start must be >= 1")
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def peek(self) -> int:
        """The ID the next call to next_id() will return."""
        with self._lock:
            return self._next
