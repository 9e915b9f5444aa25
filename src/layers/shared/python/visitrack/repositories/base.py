"""Base repository class for DynamoDB operations."""

import os
from typing import Any, Generic, TypeVar

import boto3
import structlog
from boto3.dynamodb.conditions import ConditionBase
from botocore.exceptions import ClientError

from visitrack.models.base import BaseModel

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Base repository for DynamoDB single-table design."""

    def __init__(
        self,
        model_class: type[T],
        table_name: str | None = None,
    ):
        """Initialize repository.

        Args:
            model_class: The Pydantic model class for this repository.
            table_name: DynamoDB table name. Defaults to TABLE_NAME env var.
        """
        self.model_class = model_class
        self.table_name = table_name or os.environ.get("TABLE_NAME", "visitrack-dev")
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Get DynamoDB resource (lazy initialization)."""
        if self._dynamodb is None:
            self._dynamodb = boto3.resource("dynamodb")
        return self._dynamodb

    @property
    def table(self):
        """Get DynamoDB table (lazy initialization)."""
        if self._table is None:
            self._table = self.dynamodb.Table(self.table_name)
        return self._table

    def _build_key(self, pk: str, sk: str) -> dict[str, str]:
        """Build key dictionary for DynamoDB operations."""
        return {"PK": pk, "SK": sk}

    def get(self, pk: str, sk: str) -> T | None:
        """Get an item by its primary key.

        Args:
            pk: Partition key value.
            sk: Sort key value.

        Returns:
            Model instance or None if not found.
        """
        try:
            response = self.table.get_item(Key=self._build_key(pk, sk))
            item = response.get("Item")

            if not item:
                return None

            return self.model_class.from_dynamodb(item)

        except ClientError as e:
            logger.error("DynamoDB get_item failed", error=str(e), pk=pk, sk=sk)
            raise

    def query_raw(
        self,
        key_condition: ConditionBase,
        index_name: str | None = None,
        projection: str | None = None,
        expression_names: dict[str, str] | None = None,
        scan_forward: bool = True,
    ) -> list[dict[str, Any]]:
        """Query every page of a key condition and return the raw items.

        Args:
            key_condition: boto3 Key condition.
            index_name: Optional GSI name.
            projection: Optional projection expression.
            expression_names: Attribute name placeholders for the projection.
            scan_forward: Sort direction (True = ascending).

        Returns:
            All matching items, following LastEvaluatedKey until exhausted.
        """
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": key_condition,
            "ScanIndexForward": scan_forward,
        }
        if index_name:
            kwargs["IndexName"] = index_name
        if projection:
            kwargs["ProjectionExpression"] = projection
        if expression_names:
            kwargs["ExpressionAttributeNames"] = expression_names

        items: list[dict[str, Any]] = []
        try:
            while True:
                response = self.table.query(**kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key

        except ClientError as e:
            logger.error("DynamoDB query failed", error=str(e), index_name=index_name)
            raise

        return items

    def query(
        self,
        key_condition: ConditionBase,
        index_name: str | None = None,
        scan_forward: bool = True,
    ) -> list[T]:
        """Query every page of a key condition and return model instances."""
        items = self.query_raw(key_condition, index_name=index_name, scan_forward=scan_forward)
        return [self.model_class.from_dynamodb(item) for item in items]

    def batch_write(self, items: list[T]) -> None:
        """Batch write multiple items.

        Args:
            items: List of model instances to save.
        """
        if not items:
            return

        try:
            with self.table.batch_writer() as batch:
                for item in items:
                    item.update_timestamp()
                    db_item = item.to_dynamodb()
                    db_item.update(item.get_keys())

                    gsi_keys = item.get_gsi1_keys()
                    if gsi_keys:
                        db_item.update(gsi_keys)

                    batch.put_item(Item=db_item)

            logger.debug("Batch write completed", count=len(items))

        except ClientError as e:
            logger.error("DynamoDB batch_write failed", error=str(e))
            raise

    def delete_all(self, key_condition: ConditionBase, index_name: str | None = None) -> int:
        """Delete every item matching a key condition.

        Returns:
            Number of items deleted.
        """
        items = self.query_raw(
            key_condition,
            index_name=index_name,
            projection="PK, SK",
        )
        try:
            with self.table.batch_writer() as batch:
                for item in items:
                    batch.delete_item(Key=self._build_key(item["PK"], item["SK"]))
        except ClientError as e:
            logger.error("DynamoDB batch delete failed", error=str(e))
            raise

        return len(items)
