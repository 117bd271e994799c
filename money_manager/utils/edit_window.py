# money_manager/utils/edit_window.py
from datetime import datetime, timedelta, timezone
from typing import Optional

EDIT_WINDOW = timedelta(hours=12)


def utcnow() -> datetime:
    """Naive UTC timestamp, the form ``created_at`` columns are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def can_mutate(created_at: datetime, now: Optional[datetime] = None) -> bool:
    """True while a transaction is younger than the edit window.

    The comparison is strict: a record exactly 12 hours old is frozen.
    """
    now = now or utcnow()
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(timezone.utc).replace(tzinfo=None)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    return (now - created_at) < EDIT_WINDOW
