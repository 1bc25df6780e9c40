from .dates import DATE_PATTERN, UtcDatetime, as_utc, today_string

__all__ = ["DATE_PATTERN", "UtcDatetime", "as_utc", "today_string"]
