"""UTC timestamp helpers.

Domain datetimes are always timezone-aware. Storage uses one fixed-width
UTC text form so that string comparison in SQL orders like the instants.
"""

from datetime import datetime, timezone
from typing import Optional

from nutrifex.domain.shared.errors import ValidationError

STORAGE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> datetime:
    """Current moment as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime, field_name: str) -> datetime:
    """Reject naive datetimes.

    Raises:
        ValidationError: If value is not a datetime or has no tzinfo.
    """
    if not isinstance(value, datetime):
        raise ValidationError(f"{field_name} must be a datetime, got {type(value).__name__}")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(f"{field_name} must be timezone-aware (use UTC)")
    return value


def to_storage_text(value: datetime) -> str:
    """Format an aware datetime as fixed-width UTC text.

    Examples:
        >>> to_storage_text(datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc))
        '2025-01-15T10:30:00.000000Z'
    """
    ensure_aware(value, "timestamp")
    return value.astimezone(timezone.utc).strftime(STORAGE_FORMAT)


def from_storage_text(text: str) -> datetime:
    """Parse storage text (or any ISO 8601 string) into an aware UTC datetime.

    Naive ISO strings are assumed to be UTC.

    Raises:
        ValidationError: If text is not a parseable timestamp.
    """
    try:
        return datetime.strptime(text, STORAGE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        pass

    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError as e:
        raise ValidationError(f"Invalid timestamp: {text!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def optional_to_storage_text(value: Optional[datetime]) -> Optional[str]:
    return to_storage_text(value) if value is not None else None


def optional_from_storage_text(text: Optional[str]) -> Optional[datetime]:
    return from_storage_text(text) if text else None
