"""Wall-clock deadline shared by the scanning loops."""

from __future__ import annotations

import time
from collections.abc import Callable


class TimeBudget:
    """Cooperative deadline, checked at record boundaries.

    A budget of ``None`` never expires.
    """

    def __init__(
        self,
        seconds: float | None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._seconds = seconds
        self._clock = clock
        self._start = clock()

    @property
    def elapsed(self) -> float:
        return self._clock() - self._start

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed * 1000)

    def exceeded(self) -> bool:
        if self._seconds is None:
            return False
        return self.elapsed >= self._seconds
