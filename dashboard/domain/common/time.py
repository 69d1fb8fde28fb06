from __future__ import annotations

from datetime import datetime, timezone


def ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt


def to_iso(dt: datetime) -> str:
    ensure_aware(dt)
    # store as ISO 8601 with offset
    return dt.isoformat()


def to_utc_iso(dt: datetime) -> str:
    """Normalize to UTC first, so stored timestamps sort as text in time order."""
    return to_iso(ensure_aware(dt).astimezone(timezone.utc))


def from_iso(s: str) -> datetime:
    return datetime.fromisoformat(s)


def format_date(iso: str) -> str:
    """ISO timestamp -> YYYY-MM-DD for display. Non-ISO input is shown as-is."""
    try:
        return from_iso(iso).strftime("%Y-%m-%d")
    except ValueError:
        return iso
