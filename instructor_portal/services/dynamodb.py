"""Thin wrapper around a DynamoDB table."""

from typing import Any

import boto3


class DynamoDbClient:
    """Read and write items of a single DynamoDB table."""

    def __init__(
        self, table: str, partition_key: str | None = None, resource: Any = None
    ) -> None:
        self.table_name = table
        self.partition_key = partition_key
        self.table = (resource or boto3.resource("dynamodb")).Table(table)

    def read_all(self) -> list[dict[str, Any]]:
        """Scan the whole table, following pagination."""
        response = self.table.scan()
        items = list(response.get("Items", []))
        while "LastEvaluatedKey" in response:
            response = self.table.scan(ExclusiveStartKey=response["LastEvaluatedKey"])
            items.extend(response.get("Items", []))
        return items

    def read(self, partition_id: str, sort_key: str) -> dict[str, Any] | None:
        if not self.partition_key:
            raise ValueError(
                "Partition key not set, please pass one into the constructor of this service"
            )
        response = self.table.get_item(
            Key={self.partition_key: partition_id, "sortKey": sort_key}
        )
        return response.get("Item")

    def write(self, item: dict[str, Any]) -> dict[str, Any]:
        return self.table.put_item(Item=item)

    def update(self, **params: Any) -> dict[str, Any]:
        return self.table.update_item(**params)

    def query(self, **params: Any) -> dict[str, Any]:
        return self.table.query(**params)
