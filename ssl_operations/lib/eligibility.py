"""Renewal eligibility window calculations."""

from datetime import UTC, date, datetime

from .config import DEFAULT_RENEWAL_WINDOW_DAYS


def today_utc() -> date:
    return datetime.now(UTC).date()


def days_until_expiration(expires: date, today: date | None = None) -> int:
    """Whole days from today until expires (negative once expired)."""
    if today is None:
        today = today_utc()
    return (expires - today).days


def is_eligible_for_renewal(
    expires: date | None,
    today: date | None = None,
    window_days: int = DEFAULT_RENEWAL_WINDOW_DAYS,
) -> bool:
    """Return True when expires falls within window_days of today (inclusive).

    An unknown expiration date is never eligible.
    """
    if expires is None:
        return False
    return days_until_expiration(expires, today) <= window_days
