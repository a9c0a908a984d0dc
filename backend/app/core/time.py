"""Time helpers shared by models and services."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Timezone-aware UTC now, used for column defaults and lifecycle stamps."""
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
