"""Clock and one-shot timer seams for the draw scheduler."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        """Current instant, timezone-aware."""
        ...


class Timer(Protocol):
    def arm(self, at: datetime, callback: Callable[[], None]) -> None:
        """Run ``callback`` once at ``at``, replacing any pending call."""
        ...

    def cancel(self) -> None:
        ...

    def shutdown(self) -> None:
        ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)
