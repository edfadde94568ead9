"""
S3 object store and DynamoDB log store used by the weather functions.

Both wrappers expose idempotent "ensure exists" calls plus the few reads and
writes the functions need. Failed creates, object reads and object writes are
re-raised as StorageFailureError; existence checks return False on "not found".
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError

from src.common.config import AppConfig
from src.common.errors import StorageFailureError
from src.common.models import LogEntry, format_timestamp

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

PARTITION_KEY = "partitionKey"
SORT_KEY = "rowKey"
TIMESTAMP_UTC = "timestampUtc"

NOT_FOUND_CODES = {"404", "NoSuchKey", "NoSuchBucket", "NotFound"}

# Table schema definition
TABLE_SCHEMA = {
    "KeySchema": [
        {"AttributeName": PARTITION_KEY, "KeyType": "HASH"},  # UTC day, yyyyMMdd
        {"AttributeName": SORT_KEY, "KeyType": "RANGE"},  # fetch identifier
    ],
    "AttributeDefinitions": [
        {"AttributeName": PARTITION_KEY, "AttributeType": "S"},
        {"AttributeName": SORT_KEY, "AttributeType": "S"},
    ],
    "BillingMode": "PAY_PER_REQUEST",
}


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


def object_key(identifier: str) -> str:
    return f"{identifier}.json"


class ObjectStore:
    """Raw weather payloads in an S3 bucket, one object per fetch."""

    def __init__(self, client: Any, bucket: str, region: Optional[str] = None):
        self.client = client
        self.bucket = bucket
        self.region = region

    @classmethod
    def from_config(cls, config: AppConfig) -> "ObjectStore":
        client = boto3.client("s3", **config.boto3_kwargs())
        return cls(client, config.weather_data_bucket, config.aws_region)

    def ensure_bucket(self) -> None:
        """Create the bucket if it is missing. Safe to call repeatedly."""
        try:
            self.client.head_bucket(Bucket=self.bucket)
            return
        except ClientError as e:
            if _error_code(e) not in NOT_FOUND_CODES:
                raise StorageFailureError(f"Could not access bucket {self.bucket}: {e}") from e

        create_kwargs: Dict[str, Any] = {"Bucket": self.bucket}
        if self.region and self.region != "us-east-1":
            create_kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        try:
            self.client.create_bucket(**create_kwargs)
            logger.info(f"Created bucket {self.bucket}")
        except ClientError as e:
            if _error_code(e) not in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
                raise StorageFailureError(f"Could not create bucket {self.bucket}: {e}") from e

    def put_json(self, key: str, body: str) -> None:
        """Write body under key, replacing any object with the same name."""
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body.encode("utf-8"),
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageFailureError(f"Could not write {key}: {e}") from e

    def exists(self, key: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                return False
            raise
        return True

    def get_text(self, key: str) -> str:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read().decode("utf-8")
        except (ClientError, BotoCoreError) as e:
            raise StorageFailureError(f"Could not read {key}: {e}") from e


class LogStore:
    """Fetch audit log in a DynamoDB table partitioned by UTC day."""

    def __init__(self, resource: Any, table_name: str):
        self.resource = resource
        self.client = resource.meta.client
        self.table_name = table_name
        self.table = resource.Table(table_name)

    @classmethod
    def from_config(cls, config: AppConfig) -> "LogStore":
        resource = boto3.resource("dynamodb", **config.boto3_kwargs())
        return cls(resource, config.weather_logs_table)

    def ensure_table(self) -> None:
        """Create the log table if it is missing and wait until it is active."""
        try:
            self.client.create_table(TableName=self.table_name, **TABLE_SCHEMA)
            logger.info(f"Creating table {self.table_name}")
        except ClientError as e:
            if _error_code(e) != "ResourceInUseException":
                raise StorageFailureError(f"Could not create table {self.table_name}: {e}") from e
        waiter = self.client.get_waiter("table_exists")
        waiter.wait(TableName=self.table_name)

    def table_exists(self) -> bool:
        try:
            self.client.describe_table(TableName=self.table_name)
        except ClientError as e:
            if _error_code(e) == "ResourceNotFoundException":
                return False
            raise
        return True

    def insert(self, entry: LogEntry) -> None:
        """Insert a new row; an existing row with the same keys is an error."""
        self.table.put_item(
            Item=entry.to_item(),
            ConditionExpression=f"attribute_not_exists({SORT_KEY})",
        )

    def iter_pages(self, start: datetime, end: datetime) -> Iterator[List[Dict[str, Any]]]:
        """
        Yield pages of raw items with start <= timestampUtc <= end.

        Pages follow LastEvaluatedKey until the scan is exhausted. Items keep the
        order the table returns them in.
        """
        scan_kwargs: Dict[str, Any] = {
            "FilterExpression": Attr(TIMESTAMP_UTC).between(format_timestamp(start), format_timestamp(end)),
        }
        while True:
            response = self.table.scan(**scan_kwargs)
            yield response.get("Items", [])
            if "LastEvaluatedKey" not in response:
                break
            scan_kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]

    def query_range(self, start: datetime, end: datetime) -> List[LogEntry]:
        entries: List[LogEntry] = []
        for page in self.iter_pages(start, end):
            entries.extend(LogEntry.from_item(item) for item in page)
        return entries
