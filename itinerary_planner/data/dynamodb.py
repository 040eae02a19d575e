"""
DynamoDB single-table client for planning session state.

Supports both DynamoDB Local (development) and AWS DynamoDB (production).
Set DYNAMODB_ENDPOINT env var for local, omit for AWS.
"""

from typing import Any

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from itinerary_planner.utils.logging import get_logger

logger = get_logger(__name__)


class DynamoDBClient:
    """Client for the PK/SK operations the session store needs."""

    def __init__(
        self,
        table_name: str,
        region: str = "ap-south-1",
        endpoint_url: str | None = None,
    ):
        self.table_name = table_name
        kwargs: dict[str, Any] = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
            logger.info(f"Using DynamoDB Local at {endpoint_url}")

        resource = boto3.resource("dynamodb", **kwargs)
        self.table = resource.Table(table_name)

    def put_item(self, item: dict[str, Any]) -> None:
        """Put an item into the table."""
        self.table.put_item(Item=item)

    def get_item(self, pk: str, sk: str) -> dict[str, Any] | None:
        """Get a single item by PK and SK."""
        response = self.table.get_item(Key={"PK": pk, "SK": sk})
        return response.get("Item")

    def query(self, pk: str, sk_prefix: str | None = None) -> list[dict[str, Any]]:
        """
        Query every item under a partition key.

        Args:
            pk: Partition key value
            sk_prefix: Optional sort key prefix (begins_with)
        """
        key_condition = Key("PK").eq(pk)
        if sk_prefix:
            key_condition = key_condition & Key("SK").begins_with(sk_prefix)

        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {"KeyConditionExpression": key_condition}
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    def delete_partition(self, pk: str) -> int:
        """Delete every item under a partition key; returns the count removed."""
        items = self.query(pk)
        with self.table.batch_writer() as batch:
            for item in items:
                batch.delete_item(Key={"PK": item["PK"], "SK": item["SK"]})
        return len(items)

    def create_table_if_not_exists(self) -> None:
        """Create the table with TTL enabled (for DynamoDB Local development)."""
        try:
            self.table.load()
            logger.info(f"Table {self.table_name} already exists")
            return
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") != "ResourceNotFoundException":
                raise

        client = self.table.meta.client
        client.create_table(
            TableName=self.table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        client.get_waiter("table_exists").wait(TableName=self.table_name)
        client.update_time_to_live(
            TableName=self.table_name,
            TimeToLiveSpecification={"Enabled": True, "AttributeName": "TTL"},
        )
        logger.info(f"Created table {self.table_name}")
