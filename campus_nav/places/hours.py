"""Opening-hours display for a place: per-day labels and today's open/closed line."""
from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone

from .models import WEEKDAYS

CLOSED = "Closed"
HOURS_NOT_SET = "Hours not set"
HOURS_NOT_AVAILABLE = "Hours not available"
CLOSED_TODAY = "Closed today"


def campus_now() -> datetime:
    return timezone.now().astimezone(ZoneInfo(settings.CAMPUS["timezone"]))


def day_status(day: dict | None) -> str:
    """``"Closed"``, ``"Hours not set"`` or ``"09:00 - 17:00"``."""
    day = day or {}
    if day.get("closed"):
        return CLOSED
    if not day.get("open") or not day.get("close"):
        return HOURS_NOT_SET
    return f"{day['open']} - {day['close']}"


def weekly_schedule(opening_hours: dict | None) -> list[dict]:
    hours = opening_hours or {}
    return [{"day": day, "status": day_status(hours.get(day))} for day in WEEKDAYS]


def is_open_at(day: dict | None, now: datetime) -> bool:
    day = day or {}
    if day.get("closed") or not day.get("open") or not day.get("close"):
        return False
    # zero-padded HH:MM strings compare in time order
    return day["open"] <= now.strftime("%H:%M") <= day["close"]


def current_status(opening_hours: dict | None, now: datetime | None = None) -> str:
    """Today's line, e.g. ``"Open now (until 17:00)"`` or ``"Closed (opens 09:00)"``."""
    now = now or campus_now()
    today = (opening_hours or {}).get(WEEKDAYS[now.weekday()])
    if not today:
        return HOURS_NOT_AVAILABLE
    if today.get("closed"):
        return CLOSED_TODAY
    if not today.get("open") or not today.get("close"):
        return HOURS_NOT_SET
    if is_open_at(today, now):
        return f"Open now (until {today['close']})"
    return f"Closed (opens {today['open']})"
