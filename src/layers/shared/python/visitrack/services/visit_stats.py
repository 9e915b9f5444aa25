"""Visit statistics aggregation.

Turns a snapshot of visit timestamps into a gap-filled time series for one
of four ranges. The bucket keys for the window are enumerated first, from
the clock alone, and observed visits are then tallied onto them, so a bucket
with no visits still appears with a zero count.

All bucketing is done in UTC.
"""

from collections import Counter
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel as PydanticBaseModel

from visitrack.models.base import ensure_utc, utc_now
from visitrack.utils.exceptions import InvalidRangeError

HOUR_KEY_FORMAT = "%Y-%m-%dT%H:00"
DAY_KEY_FORMAT = "%Y-%m-%d"
MONTH_KEY_FORMAT = "%Y-%m"

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class StatsRange(str, Enum):
    """Time ranges the statistics endpoint supports."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class Bucket(PydanticBaseModel):
    """Visit count for one slice of a range window."""

    key: str
    label: str
    count: int = 0


class BucketPolicy(NamedTuple):
    """Bucketing rules for one range."""

    bucket_count: int
    # timestamp -> bucket key
    truncate: Callable[[datetime], str]
    # now -> every bucket key in the window, oldest first
    enumerate: Callable[[datetime], list[str]]
    # bucket key -> display label
    label: Callable[[str], str]
    # bucket key -> instant the bucket starts
    start: Callable[[str], datetime]


def _key_formatter(fmt: str) -> Callable[[datetime], str]:
    def truncate(value: datetime) -> str:
        return ensure_utc(value).strftime(fmt)

    return truncate


def _key_parser(fmt: str) -> Callable[[str], datetime]:
    def start(key: str) -> datetime:
        return datetime.strptime(key, fmt).replace(tzinfo=timezone.utc)

    return start


def _last_hours(count: int) -> Callable[[datetime], list[str]]:
    def enumerate_hours(now: datetime) -> list[str]:
        current = ensure_utc(now).replace(minute=0, second=0, microsecond=0)
        return [
            (current - timedelta(hours=offset)).strftime(HOUR_KEY_FORMAT)
            for offset in range(count - 1, -1, -1)
        ]

    return enumerate_hours


def _last_days(count: int) -> Callable[[datetime], list[str]]:
    def enumerate_days(now: datetime) -> list[str]:
        today = ensure_utc(now).date()
        return [
            (today - timedelta(days=offset)).strftime(DAY_KEY_FORMAT)
            for offset in range(count - 1, -1, -1)
        ]

    return enumerate_days


def _last_months(count: int) -> Callable[[datetime], list[str]]:
    def enumerate_months(now: datetime) -> list[str]:
        now = ensure_utc(now)
        current = now.year * 12 + now.month - 1
        keys = []
        for offset in range(count - 1, -1, -1):
            year, month_index = divmod(current - offset, 12)
            keys.append(f"{year:04d}-{month_index + 1:02d}")
        return keys

    return enumerate_months


def _hour_label(key: str) -> str:
    return datetime.strptime(key, HOUR_KEY_FORMAT).strftime("%H:00")


def _weekday_label(key: str) -> str:
    day = datetime.strptime(key, DAY_KEY_FORMAT)
    return f"{WEEKDAY_NAMES[day.weekday()]} {day.day}"


def _date_label(key: str) -> str:
    return key


def _month_label(key: str) -> str:
    month = datetime.strptime(key, MONTH_KEY_FORMAT)
    return f"{MONTH_NAMES[month.month - 1]} {month.year}"


RANGE_POLICIES: dict[StatsRange, BucketPolicy] = {
    StatsRange.DAY: BucketPolicy(
        bucket_count=24,
        truncate=_key_formatter(HOUR_KEY_FORMAT),
        enumerate=_last_hours(24),
        label=_hour_label,
        start=_key_parser(HOUR_KEY_FORMAT),
    ),
    StatsRange.WEEK: BucketPolicy(
        bucket_count=7,
        truncate=_key_formatter(DAY_KEY_FORMAT),
        enumerate=_last_days(7),
        label=_weekday_label,
        start=_key_parser(DAY_KEY_FORMAT),
    ),
    StatsRange.MONTH: BucketPolicy(
        bucket_count=30,
        truncate=_key_formatter(DAY_KEY_FORMAT),
        enumerate=_last_days(30),
        label=_date_label,
        start=_key_parser(DAY_KEY_FORMAT),
    ),
    StatsRange.YEAR: BucketPolicy(
        bucket_count=12,
        truncate=_key_formatter(MONTH_KEY_FORMAT),
        enumerate=_last_months(12),
        label=_month_label,
        start=_key_parser(MONTH_KEY_FORMAT),
    ),
}


def parse_range(value: Any) -> StatsRange:
    """Convert a request value to a StatsRange.

    Raises:
        InvalidRangeError: If the value is not a supported range.
    """
    if isinstance(value, StatsRange):
        return value
    try:
        return StatsRange(value)
    except ValueError:
        raise InvalidRangeError(value, [r.value for r in StatsRange]) from None


def bucket_count(stats_range: StatsRange | str) -> int:
    """Number of buckets a range always produces."""
    return RANGE_POLICIES[parse_range(stats_range)].bucket_count


def window_start(stats_range: StatsRange | str, now: datetime) -> datetime:
    """Start of the oldest bucket in the window ending at now."""
    policy = RANGE_POLICIES[parse_range(stats_range)]
    return policy.start(policy.enumerate(ensure_utc(now))[0])


def _visit_time(visit: Any) -> datetime:
    if isinstance(visit, datetime):
        return ensure_utc(visit)
    return ensure_utc(visit.last_visit)


def aggregate(
    stats_range: StatsRange | str,
    visits: Iterable[Any],
    now: datetime | None = None,
) -> list[Bucket]:
    """Count visits per bucket across a range window.

    Args:
        stats_range: One of day, week, month, year.
        visits: Visit timestamps, or objects with a last_visit attribute.
        now: End of the window. Defaults to the current UTC time.

    Returns:
        Exactly bucket_count(stats_range) buckets, oldest first. Visits
        outside [window start, now] are not counted.

    Raises:
        InvalidRangeError: If stats_range is not supported.
    """
    policy = RANGE_POLICIES[parse_range(stats_range)]
    now = ensure_utc(now) if now else utc_now()

    keys = policy.enumerate(now)
    start = policy.start(keys[0])

    tally = Counter(
        policy.truncate(visited_at)
        for visited_at in map(_visit_time, visits)
        if start <= visited_at <= now
    )

    return [
        Bucket(key=key, label=policy.label(key), count=tally.get(key, 0))
        for key in keys
    ]
