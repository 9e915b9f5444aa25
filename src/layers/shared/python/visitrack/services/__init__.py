"""Service functions for business logic."""

from visitrack.services.visit_stats import (
    Bucket,
    BucketPolicy,
    RANGE_POLICIES,
    StatsRange,
    aggregate,
    bucket_count,
    parse_range,
    window_start,
)
from visitrack.services.demo_data import generate_visitors, seed_demo_visitors
from visitrack.services.visitor_summary import (
    VisitorSummary,
    is_mobile_user_agent,
    summarize_visitors,
)

__all__ = [
    "Bucket",
    "BucketPolicy",
    "RANGE_POLICIES",
    "StatsRange",
    "aggregate",
    "bucket_count",
    "parse_range",
    "window_start",
    "generate_visitors",
    "seed_demo_visitors",
    "VisitorSummary",
    "is_mobile_user_agent",
    "summarize_visitors",
]
