from __future__ import annotations

from datetime import date


class FakeClock:
    """Settable ``today`` for the store, so timestamps are predictable."""

    def __init__(self, day: date) -> None:
        self.day = day

    def __call__(self) -> date:
        return self.day


class FakeMillis:
    """Frozen millisecond clock; every id request sees the same instant."""

    def __init__(self, start: int = 1_760_000_000_000) -> None:
        self.value = start

    def __call__(self) -> int:
        return self.value
