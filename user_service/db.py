# user_service/db.py

import logging
from functools import lru_cache

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from user_service.settings import (
    AWS_DEFAULT_REGION,
    DYNAMODB_ENDPOINT_URL,
    DYNAMODB_TABLE_NAME,
)

logger = logging.getLogger(__name__)

boto_config = Config(retries={"max_attempts": 5, "mode": "standard"})


def dynamodb_resource():
    return boto3.resource(
        "dynamodb",
        region_name=AWS_DEFAULT_REGION,
        endpoint_url=DYNAMODB_ENDPOINT_URL,
        config=boto_config,
    )


class Dynamodb:
    """
    Thin wrapper over a DynamoDB table resource.

    Every call targets the bound table; all other keyword arguments are passed
    straight through to boto3, so callers can add ConditionExpression,
    ProjectionExpression, IndexName and friends as they need.
    """

    def __init__(self, table_name: str = DYNAMODB_TABLE_NAME, resource=None):
        self.resource = resource or dynamodb_resource()
        self.client = self.resource.meta.client
        self.table_name = table_name
        self.table = self.resource.Table(table_name)
        logger.info("Dynamodb initialized for table %s", table_name)

    def list_tables(self, limit: int = 5):
        try:
            tables = self.client.list_tables(Limit=limit)["TableNames"]
            logger.info("Tables: %s", tables)
            return tables
        except ClientError:
            logger.exception("Listing tables failed")
            raise

    def create(self, **params):
        try:
            return self.table.put_item(**params)
        except ClientError as e:
            logger.error("DynamoDB create error: %s", e)
            raise

    def update(self, **params):
        return self.table.update_item(**params)

    def delete(self, **params):
        return self.table.delete_item(**params)

    def get(self, **params):
        return self.table.get_item(**params)

    def query(self, **params):
        """Run a query and return its first item, or None."""
        parameters = {
            "KeyConditionExpression": "PK = :pk",
            "ExpressionAttributeValues": {":pk": ""},
            **params,
        }
        response = self.table.query(**parameters)
        items = response.get("Items", [])
        return items[0] if items else None

    def scan(self, limit: int = 20, start_key=None, **rest):
        scan_args = {"Limit": limit, **rest}
        if start_key:
            scan_args["ExclusiveStartKey"] = start_key
        response = self.table.scan(**scan_args)
        return {
            "items": response.get("Items", []),
            "nextKey": response.get("LastEvaluatedKey"),
        }


@lru_cache(maxsize=1)
def get_db() -> Dynamodb:
    return Dynamodb()
