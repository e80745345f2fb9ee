"""Clocks — the time collaborator, as integer seconds since epoch.

Invariants:
    - now() returns an int (UnixTimestamp), never a float or datetime
    - Services call now() once per transition and reuse the value
"""

import time

from submarket.core.domain_types import UnixTimestamp


class SystemClock:
    """Wall clock."""

    def now(self) -> UnixTimestamp:
        return UnixTimestamp(int(time.time()))


class FixedClock:
    """Deterministic clock for tests and replays; advance() moves it forward."""

    def __init__(self, start: int):
        self._now = start

    def now(self) -> UnixTimestamp:
        return UnixTimestamp(self._now)

    def advance(self, seconds: int) -> None:
        self._now += seconds

    def set(self, timestamp: int) -> None:
        self._now = timestamp
