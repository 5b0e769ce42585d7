# core/utils.py

"""
Repository for program-wide utilities.

Student identifiers are generated as "S" followed by a millisecond timestamp. Successive calls
within the same millisecond would collide on a plain clock read, so each generator remembers the
last value it issued and bumps forward by one when the clock has not advanced. Values issued by a
single generator are therefore strictly increasing and never repeat for the life of the process.
"""

import time
from typing import Callable


class IdGenerator:

    def __init__(
        self, prefix: str = "S", clock: Callable[[], int] = time.time_ns
    ) -> None:
        self._prefix = prefix
        self._clock = clock
        self._last: int = 0

    @property
    def prefix(self) -> str:
        return self._prefix

    def next_id(self) -> str:
        now_ms = self._clock() // 1_000_000
        self._last = max(now_ms, self._last + 1)

        return f"{self._prefix}{self._last}"


_default_generator = IdGenerator()


def generate_student_id() -> str:
    return _default_generator.next_id()
