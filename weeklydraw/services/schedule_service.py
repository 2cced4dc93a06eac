"""Next-draw calculation under the weekly rule.

Draws happen at a fixed local time on fixed weekdays in a reference zone
with a constant UTC offset. Weekdays use Sunday=0 numbering, so the
default Tuesday/Saturday rule is ``(2, 6)``.

All functions are pure: they take an aware instant and never consult the
host timezone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

DATE_FORMAT = "%d.%m.%Y"


@dataclass(frozen=True)
class DrawRule:
    weekdays: tuple[int, ...] = (2, 6)
    at: time = time(0, 1)
    utc_offset_hours: int = 3

    def __post_init__(self) -> None:
        if not self.weekdays:
            raise ValueError("DrawRule needs at least one weekday")
        if any(d < 0 or d > 6 for d in self.weekdays):
            raise ValueError("Weekdays must be within 0..6 (Sunday=0)")

    @property
    def tz(self) -> timezone:
        return timezone(timedelta(hours=self.utc_offset_hours))

    @classmethod
    def from_config(cls, weekdays: str, at: str, utc_offset_hours: int) -> "DrawRule":
        """Build a rule from ``"2,6"``, ``"00:01"`` and an hour offset."""

        days = tuple(sorted({int(d) for d in str(weekdays).split(",") if d.strip()}))
        hour, _, minute = str(at).partition(":")
        return cls(weekdays=days, at=time(int(hour), int(minute or 0)), utc_offset_hours=int(utc_offset_hours))


DEFAULT_RULE = DrawRule()


def _require_aware(instant: datetime) -> None:
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError("Expected a timezone-aware datetime")


def sunday_weekday(day: date) -> int:
    """Weekday of ``day`` with Sunday=0 .. Saturday=6."""

    return (day.weekday() + 1) % 7


def to_reference(instant: datetime, rule: DrawRule = DEFAULT_RULE) -> datetime:
    """Convert an aware instant into the rule's reference zone."""

    _require_aware(instant)
    return instant.astimezone(rule.tz)


def draw_instant_for(day: date, rule: DrawRule = DEFAULT_RULE) -> datetime:
    """The draw time of the civil date ``day`` in the reference zone."""

    return datetime.combine(day, rule.at, tzinfo=rule.tz)


def next_draw_at(now: datetime, rule: DrawRule = DEFAULT_RULE) -> datetime:
    """Next draw instant for ``now``.

    Today only qualifies while the local time is strictly before the draw
    time; from the draw time on, the following target day is returned.
    """

    local = to_reference(now, rule)
    today = local.date()
    weekday = sunday_weekday(today)

    if weekday in rule.weekdays and local < draw_instant_for(today, rule):
        return draw_instant_for(today, rule)

    offset = min((d - weekday) % 7 or 7 for d in rule.weekdays)
    return draw_instant_for(today + timedelta(days=offset), rule)


def format_draw_date(instant: datetime, rule: DrawRule = DEFAULT_RULE) -> str:
    """``dd.mm.yyyy`` civil date of ``instant`` in the reference zone."""

    return to_reference(instant, rule).strftime(DATE_FORMAT)


def parse_draw_date(text: str) -> date:
    """Parse a ``dd.mm.yyyy`` history date; raises ValueError otherwise."""

    return datetime.strptime(str(text).strip(), DATE_FORMAT).date()
