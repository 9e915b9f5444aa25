"""Visitor repository for visit tracking.

Uses a single DynamoDB UpdateItem per visit so the upsert is atomic per
identifier. First-visit fields are written with if_not_exists.
"""

from datetime import datetime

import structlog
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from visitrack.models.base import generate_ulid, isoformat_utc, utc_now
from visitrack.models.visitor import (
    MAX_USER_AGENT_LENGTH,
    VISITOR_SK,
    VISITORS_GSI1PK,
    Visitor,
    VisitorTotals,
    visitor_pk,
)
from visitrack.repositories.base import BaseRepository

logger = structlog.get_logger()


class VisitorRepository(BaseRepository[Visitor]):
    """Repository for Visitor records in DynamoDB."""

    def __init__(self, table_name: str | None = None):
        super().__init__(Visitor, table_name)

    def get_by_identifier(self, identifier: str) -> Visitor | None:
        """Get a visitor by identifier.

        Args:
            identifier: Client IP address.

        Returns:
            Visitor or None if not found.
        """
        return self.get(visitor_pk(identifier), VISITOR_SK)

    def record_visit(
        self,
        identifier: str,
        user_agent: str | None = None,
        now: datetime | None = None,
    ) -> Visitor:
        """Create or update a visitor on page view.

        Args:
            identifier: Client IP address.
            user_agent: Client user agent string.
            now: Visit time. Defaults to the current UTC time.

        Returns:
            The stored visitor after the upsert.
        """
        visited_at = isoformat_utc(now or utc_now())

        set_parts = [
            "#id = if_not_exists(#id, :id)",
            "#identifier = if_not_exists(#identifier, :identifier)",
            "#created_at = if_not_exists(#created_at, :now)",
            # Always overwrite last-touch fields
            "#user_agent = :ua",
            "#last_visit = :now",
            "#updated_at = :now",
            "#gsi1pk = :gsi1pk",
            "#gsi1sk = :now",
        ]
        update_expr = f"SET {', '.join(set_parts)} ADD #visit_count :one"

        try:
            response = self.table.update_item(
                Key=self._build_key(visitor_pk(identifier), VISITOR_SK),
                UpdateExpression=update_expr,
                ExpressionAttributeNames={
                    "#id": "id",
                    "#identifier": "identifier",
                    "#created_at": "created_at",
                    "#user_agent": "user_agent",
                    "#last_visit": "last_visit",
                    "#updated_at": "updated_at",
                    "#gsi1pk": "GSI1PK",
                    "#gsi1sk": "GSI1SK",
                    "#visit_count": "visit_count",
                },
                ExpressionAttributeValues={
                    ":id": generate_ulid(),
                    ":identifier": identifier,
                    ":ua": user_agent[:MAX_USER_AGENT_LENGTH] if user_agent else None,
                    ":now": visited_at,
                    ":gsi1pk": VISITORS_GSI1PK,
                    ":one": 1,
                },
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            logger.error(
                "Failed to record visit",
                identifier=identifier,
                error=str(e),
            )
            raise

        return Visitor.from_dynamodb(response["Attributes"])

    def list_seen_between(self, start: datetime, end: datetime) -> list[Visitor]:
        """List visitors whose last visit falls within [start, end].

        Args:
            start: Window start (inclusive).
            end: Window end (inclusive).

        Returns:
            Visitors ordered by last visit, oldest first.
        """
        condition = Key("GSI1PK").eq(VISITORS_GSI1PK) & Key("GSI1SK").between(
            isoformat_utc(start), isoformat_utc(end)
        )
        return self.query(condition, index_name="GSI1")

    def get_totals(self) -> VisitorTotals:
        """Count visits and distinct identifiers across all visitors."""
        items = self.query_raw(
            Key("GSI1PK").eq(VISITORS_GSI1PK),
            index_name="GSI1",
            projection="#visit_count",
            expression_names={"#visit_count": "visit_count"},
        )
        # Records written before visit counting existed count once
        total = sum(int(item.get("visit_count", 1)) for item in items)
        return VisitorTotals(total_visitors=total, unique_visitors=len(items))

    def delete_all_visitors(self) -> int:
        """Remove every visitor record. Used by the development seeder."""
        return self.delete_all(Key("GSI1PK").eq(VISITORS_GSI1PK), index_name="GSI1")
