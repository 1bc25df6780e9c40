from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated
from zoneinfo import ZoneInfo

from pydantic import AfterValidator

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def today_string(timezone_name: str = "UTC") -> str:
    """Current calendar date as ``YYYY-MM-DD`` in the given IANA timezone."""
    return datetime.now(ZoneInfo(timezone_name)).strftime("%Y-%m-%d")


def as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on read; stored values are always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]
