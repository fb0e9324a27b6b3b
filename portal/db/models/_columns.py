# /portal/db/models/_columns.py

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Python-side default so ordering by creation time keeps sub-second precision."""
    return datetime.now(timezone.utc)
