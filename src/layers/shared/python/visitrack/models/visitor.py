"""Visitor model for anonymous visit tracking.

One record per client identifier (IP address). A repeat visit overwrites the
user agent and last visit time and bumps the visit counter.

DynamoDB keys:
    PK: VISITOR#{identifier}
    SK: PROFILE
    GSI1PK: VISITORS
    GSI1SK: {last_visit ISO timestamp}
"""

from datetime import datetime

from pydantic import BaseModel as PydanticBaseModel, Field

from visitrack.models.base import BaseModel, isoformat_utc, utc_now

VISITOR_SK = "PROFILE"
VISITORS_GSI1PK = "VISITORS"

# Longer user agents are cut to this length before storage
MAX_USER_AGENT_LENGTH = 500


def visitor_pk(identifier: str) -> str:
    """Partition key for a visitor identifier."""
    return f"VISITOR#{identifier}"


class Visitor(BaseModel):
    """A client seen by the widget, keyed by IP address."""

    identifier: str
    user_agent: str | None = None
    last_visit: datetime = Field(default_factory=utc_now)
    visit_count: int = 1

    def get_pk(self) -> str:
        """Get the partition key."""
        return visitor_pk(self.identifier)

    def get_sk(self) -> str:
        """Get the sort key."""
        return VISITOR_SK

    def get_gsi1_keys(self) -> dict[str, str]:
        """Index every visitor by last visit for window queries."""
        return {
            "GSI1PK": VISITORS_GSI1PK,
            "GSI1SK": isoformat_utc(self.last_visit),
        }


class VisitorTotals(PydanticBaseModel):
    """Visit totals across all stored visitors."""

    total_visitors: int = 0
    unique_visitors: int = 0
