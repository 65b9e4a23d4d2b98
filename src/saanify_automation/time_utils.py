"""Timezone-safe datetime helpers."""

from __future__ import annotations

from datetime import datetime

import pytz


def now_utc() -> datetime:
    return datetime.now(pytz.UTC)


def coerce_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 timestamp as returned by PostgREST into aware UTC."""
    if value is None or isinstance(value, datetime):
        return coerce_utc(value)
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return coerce_utc(datetime.fromisoformat(text))


def isoformat_utc(value: datetime) -> str:
    return coerce_utc(value).isoformat()
