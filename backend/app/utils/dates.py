from datetime import datetime, timezone


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Columns are naive UTC; convert aware datetimes before storing them."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def whole_hours_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 3600)
