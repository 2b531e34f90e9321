"""Arrival-time parsing and 3-hour forecast slot rounding."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

FORECAST_SLOT_SECONDS = 3 * 60 * 60
ARRIVAL_CHOICE_COUNT = 12


def parse_time_label(label: str) -> tuple[int, int]:
    """Convert a form time label into a 24-hour (hour, minute) pair.

    Accepts the 12-hour labels the form displays ("07:00 PM", "12:00 AM") and
    plain 24-hour "HH:MM". Raises ValueError for anything else.
    """

    if not label or not label.strip():
        raise ValueError("Arrival time is empty")

    parts = label.strip().split()
    if len(parts) > 2:
        raise ValueError(f"Unrecognized time label: {label!r}")
    clock = parts[0]
    modifier = parts[1].upper().replace(".", "") if len(parts) == 2 else None

    hours_str, sep, minutes_str = clock.partition(":")
    if not sep:
        raise ValueError(f"Unrecognized time label: {label!r}")
    try:
        hours = int(hours_str)
        minutes = int(minutes_str)
    except ValueError as exc:
        raise ValueError(f"Unrecognized time label: {label!r}") from exc

    if modifier is None:
        if not 0 <= hours <= 23:
            raise ValueError(f"Hour out of range: {label!r}")
    elif modifier in {"AM", "PM"}:
        if not 1 <= hours <= 12:
            raise ValueError(f"Hour out of range: {label!r}")
        if modifier == "PM" and hours != 12:
            hours += 12
        elif modifier == "AM" and hours == 12:
            hours = 0
    else:
        raise ValueError(f"Unrecognized time label: {label!r}")

    if not 0 <= minutes <= 59:
        raise ValueError(f"Minute out of range: {label!r}")
    return hours, minutes


def format_time_label(moment: datetime) -> str:
    """Render a datetime the way the form labels arrival choices."""

    return moment.strftime("%I:%M %p")


def arrival_choices(now: datetime, count: int = ARRIVAL_CHOICE_COUNT) -> list[str]:
    """Hourly labels starting at the current hour."""

    # consecutive choices are one elapsed hour apart, across DST changes
    start = now.replace(minute=0, second=0, microsecond=0).astimezone(timezone.utc)
    return [
        format_time_label((start + timedelta(hours=offset)).astimezone(now.tzinfo))
        for offset in range(count)
    ]


def resolve_arrival(label: str, now: datetime) -> datetime:
    """Turn an arrival label into a datetime in ``now``'s timezone.

    The choices cover the next twelve hours, so a label earlier than the
    current hour refers to tomorrow.
    """

    hours, minutes = parse_time_label(label)
    arrival = now.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    if arrival < now.replace(minute=0, second=0, microsecond=0):
        arrival += timedelta(days=1)
    return arrival


def round_to_forecast_slot(moment: datetime) -> datetime:
    """Round to the nearest 3-hour boundary (UTC epoch aligned, half up)."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    slot = math.floor(moment.timestamp() / FORECAST_SLOT_SECONDS + 0.5)
    return datetime.fromtimestamp(slot * FORECAST_SLOT_SECONDS, tz=timezone.utc)


def forecast_timestamp(moment: datetime | int | float) -> int:
    """Unix seconds of the forecast slot nearest to ``moment``."""

    if not isinstance(moment, datetime):
        moment = datetime.fromtimestamp(moment, tz=timezone.utc)
    return int(round_to_forecast_slot(moment).timestamp())


__all__ = [
    "ARRIVAL_CHOICE_COUNT",
    "FORECAST_SLOT_SECONDS",
    "arrival_choices",
    "format_time_label",
    "forecast_timestamp",
    "parse_time_label",
    "resolve_arrival",
    "round_to_forecast_slot",
]
