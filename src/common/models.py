"""Log entry model stored in the WeatherLogs table."""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class LogStatus(str, Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"


def to_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """
    Fixed-width UTC timestamp, YYYY-MM-DDTHH:MM:SS.ffffffZ.

    String order in the table matches time order, so the year is always four digits.
    """
    return to_utc(value).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(value))


def format_partition_key(value: datetime) -> str:
    """UTC day as yyyyMMdd."""
    value = to_utc(value)
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


class LogEntry(BaseModel):
    """
    One fetch attempt.

    partition_key groups attempts by UTC day (yyyyMMdd); row_key is the identifier
    the weather object was stored under when the attempt succeeded.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    partition_key: str = Field(alias="partitionKey")
    row_key: str = Field(alias="rowKey")
    status: LogStatus
    message: str
    timestamp_utc: datetime = Field(alias="timestampUtc")

    @classmethod
    def create(cls, identifier: str, timestamp: datetime, status: LogStatus, message: str) -> "LogEntry":
        timestamp = to_utc(timestamp)
        return cls(
            partition_key=format_partition_key(timestamp),
            row_key=identifier,
            status=status,
            message=message,
            timestamp_utc=timestamp,
        )

    def to_item(self) -> Dict[str, Any]:
        """Serialize for the log table and for HTTP responses."""
        return {
            "partitionKey": self.partition_key,
            "rowKey": self.row_key,
            "status": self.status.value,
            "message": self.message,
            "timestampUtc": format_timestamp(self.timestamp_utc),
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "LogEntry":
        return cls(
            partition_key=str(item["partitionKey"]),
            row_key=str(item["rowKey"]),
            status=LogStatus(item["status"]),
            message=str(item.get("message", "")),
            timestamp_utc=parse_timestamp(str(item["timestampUtc"])),
        )
