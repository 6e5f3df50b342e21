"""
Timestamp Utilities

ISO-8601 timestamps for document metadata and filesystem-safe variants
for backup filenames. Both are UTC and lexically ordered.

Example:
    utc_now_iso()          -> "2025-06-01T14:30:17.234Z"
    filename_timestamp()   -> "2025-06-01T14-30-17-234567Z"
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(ts: datetime) -> str:
    """
    Format a datetime as ISO-8601 with millisecond precision and a Z suffix.

    Naive datetimes are treated as UTC.
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return to_iso(utc_now())


def filename_timestamp(ts: datetime | None = None) -> str:
    """
    Filesystem-safe timestamp for backup names.

    Colons and periods are replaced by dashes. Microseconds are kept so
    backups taken in quick succession still get distinct names.
    """
    ts = ts or utc_now()
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    raw = ts.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return raw.replace(":", "-").replace(".", "-")
