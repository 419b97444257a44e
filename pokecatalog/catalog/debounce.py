# ABOUTME: Delay-then-commit policy for the search box.
# ABOUTME: Echoes input immediately and commits it once it has been stable for the debounce delay.

import time
from collections.abc import Callable

from pokecatalog.settings import settings


class DebouncedInput:
    """Search input that commits to the filters only after the user stops typing.

    ``value`` always reflects the latest input. ``poll`` returns the value to commit once
    it has been unchanged for ``delay`` seconds and differs from what is committed.
    ``sync`` applies an external change to the committed value and wins over pending input.
    """

    def __init__(
        self,
        committed: str = "",
        delay: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.delay = delay if delay is not None else settings.SEARCH_DEBOUNCE_SECONDS
        self.committed = committed
        self.value = committed
        self._clock = clock
        self._changed_at: float | None = None

    @property
    def pending(self) -> bool:
        """True while typed input has not been committed yet."""
        return self._changed_at is not None

    def type(self, value: str) -> None:
        """Record new input and restart the delay."""
        if value == self.value:
            return
        self.value = value
        self._changed_at = self._clock()

    def poll(self) -> str | None:
        """Return the input to commit, or None if it is not stable yet or unchanged."""
        if self._changed_at is None or self._clock() - self._changed_at < self.delay:
            return None
        self._changed_at = None
        if self.value == self.committed:
            return None
        self.committed = self.value
        return self.value

    def sync(self, committed: str) -> None:
        """Adopt an externally committed value, discarding pending input."""
        self.committed = committed
        self.value = committed
        self._changed_at = None
