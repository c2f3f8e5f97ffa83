"""UTC timestamps for run summaries."""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)


def utc_timestamp(value: datetime | None = None) -> str:
    """Format ``value`` (default: now) as an ISO-8601 UTC string to the second.

    Naive datetimes are taken to be UTC already.
    """

    moment = value if value is not None else now_utc()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="seconds")
