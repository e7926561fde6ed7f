"""Date helpers for the ISO-8601 wire format and date-only form fields."""

from datetime import UTC, date, datetime


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_iso(value: datetime) -> str:
    """Serialise a datetime the way the backend emits it (UTC, ms, ``Z``)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def due_from_date_input(value: str | None) -> str | None:
    """Convert a ``YYYY-MM-DD`` form value to a midnight-UTC ISO timestamp.

    Returns None for blank input. Raises ValueError for malformed dates.
    """
    if value is None or not value.strip():
        return None
    day = date.fromisoformat(value.strip())
    return to_iso(datetime(day.year, day.month, day.day, tzinfo=UTC))


def due_to_date_input(value: datetime | None) -> str | None:
    """Render a due date as the ``YYYY-MM-DD`` string a date field expects."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).date().isoformat()


def format_date(value: datetime | None) -> str:
    """Medium-style date for display, e.g. ``Mar 1, 2024``."""
    if value is None:
        return "-"
    try:
        return f"{value:%b} {value.day}, {value.year}"
    except (TypeError, ValueError):
        return str(value)
