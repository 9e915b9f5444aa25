"""Summary statistics over a set of visitors."""

import re
from collections import Counter
from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel as PydanticBaseModel, Field

from visitrack.models.visitor import Visitor

MOBILE_UA_REGEX = re.compile(r"iPhone|Android|iPad|Mobile", re.IGNORECASE)


def is_mobile_user_agent(user_agent: str | None) -> bool:
    """Check whether a user agent string looks like a mobile device."""
    return bool(user_agent and MOBILE_UA_REGEX.search(user_agent))


class VisitorSummary(PydanticBaseModel):
    """Aggregate facts about a visitor set."""

    total: int = 0
    unique_visitors: int = 0
    return_visitors: int = 0
    earliest: datetime | None = None
    latest: datetime | None = None
    visitors_by_year: dict[int, int] = Field(default_factory=dict)
    top_user_agent: str | None = None
    top_user_agent_count: int = 0
    mobile: int = 0
    desktop: int = 0


def summarize_visitors(visitors: Iterable[Visitor]) -> VisitorSummary:
    """Summarize visitors by visit volume, time span, year and device.

    Args:
        visitors: Visitor records.

    Returns:
        VisitorSummary. Totals count visits (visit_count), the per-year,
        user agent and device breakdowns count records.
    """
    visitors = list(visitors)
    if not visitors:
        return VisitorSummary()

    total = sum(v.visit_count for v in visitors)
    visit_times = [v.last_visit for v in visitors]
    by_year = Counter(t.year for t in visit_times)
    user_agents = Counter(v.user_agent for v in visitors if v.user_agent)
    mobile = sum(1 for v in visitors if is_mobile_user_agent(v.user_agent))

    top_user_agent, top_count = (None, 0)
    if user_agents:
        top_user_agent, top_count = user_agents.most_common(1)[0]

    return VisitorSummary(
        total=total,
        unique_visitors=len(visitors),
        return_visitors=total - len(visitors),
        earliest=min(visit_times),
        latest=max(visit_times),
        visitors_by_year=dict(sorted(by_year.items())),
        top_user_agent=top_user_agent,
        top_user_agent_count=top_count,
        mobile=mobile,
        desktop=len(visitors) - mobile,
    )
