"""Resolution of the analysis time window."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence, Union

from .errors import ConfigurationError
from .models import TimeWindow


def _parse_date(value: str) -> datetime:
    """Parse an ISO date (or timestamp) as UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid date in interval: '{value}'") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_interval(interval: Union[str, Sequence[str]]) -> TimeWindow:
    """Parse an interval of exactly two ISO dates into a closed window.

    Args:
        interval: "YYYY-MM-DD,YYYY-MM-DD" or a pair of date strings

    Returns:
        TimeWindow from the first date to the second date
    """
    parts = interval.split(',') if isinstance(interval, str) else list(interval)
    if len(parts) != 2:
        raise ConfigurationError(f"Interval must contain exactly two dates, got: {interval!r}")

    start, end = (_parse_date(p) for p in parts)
    if start > end:
        raise ConfigurationError(f"Interval start {parts[0].strip()} is after end {parts[1].strip()}")
    return TimeWindow(start=start, end=end)


def resolve_window(since_days: Optional[int] = None,
                   interval: Union[str, Sequence[str], None] = None,
                   now: Optional[datetime] = None) -> TimeWindow:
    """Compute the analysis window.

    An interval always takes precedence over the day count, even when both
    are given.

    Args:
        since_days: Number of days to look back from now
        interval: Explicit date interval, see parse_interval
        now: Reference time for the day count (defaults to the current UTC time)

    Returns:
        The resolved TimeWindow
    """
    if interval:
        window = parse_interval(interval)
        logging.info(f"Using explicit interval: {window.describe()}")
        return window

    if since_days is None:
        raise ConfigurationError("Either SINCE_DAYS or INTERVAL_DATES must be set")

    now = now or datetime.now(timezone.utc)
    window = TimeWindow(start=now - timedelta(days=since_days))
    logging.info(f"Looking for PRs updated in the last {since_days} days ({window.describe()})")
    return window
