"""Shared fixtures: config plus in-memory object and log stores."""
from typing import Dict, List

import pytest

from src.common.config import AppConfig
from src.common.errors import StorageFailureError
from src.common.models import LogEntry, format_timestamp
from src.common.storage import LogStore, ObjectStore


class FakeObjectStore(ObjectStore):
    """Dict-backed object store that counts calls."""

    def __init__(self, bucket: str = "weatherdata", fail_writes: bool = False):
        self.bucket = bucket
        self.objects: Dict[str, str] = {}
        self.bucket_created = False
        self.fail_writes = fail_writes
        self.calls: List[str] = []

    def ensure_bucket(self) -> None:
        self.calls.append("ensure_bucket")
        self.bucket_created = True

    def put_json(self, key: str, body: str) -> None:
        self.calls.append("put_json")
        if self.fail_writes:
            raise StorageFailureError(f"Could not write {key}: disk on fire")
        self.objects[key] = body

    def exists(self, key: str) -> bool:
        self.calls.append("exists")
        return key in self.objects

    def get_text(self, key: str) -> str:
        self.calls.append("get_text")
        return self.objects[key]


class FakeLogStore(LogStore):
    """List-backed log store that serves scans in fixed-size pages."""

    def __init__(self, table_name: str = "WeatherLogs", created: bool = False, page_size: int = 2):
        self.table_name = table_name
        self.created = created
        self.page_size = page_size
        self.items: List[dict] = []
        self.pages_served = 0

    def ensure_table(self) -> None:
        self.created = True

    def table_exists(self) -> bool:
        return self.created

    def insert(self, entry: LogEntry) -> None:
        item = entry.to_item()
        for existing in self.items:
            if (existing["partitionKey"], existing["rowKey"]) == (item["partitionKey"], item["rowKey"]):
                raise ValueError("The conditional request failed")
        self.items.append(item)

    def iter_pages(self, start, end):
        low, high = format_timestamp(start), format_timestamp(end)
        for i in range(0, len(self.items), self.page_size):
            self.pages_served += 1
            yield [item for item in self.items[i:i + self.page_size] if low <= item["timestampUtc"] <= high]


@pytest.fixture
def app_config():
    return AppConfig(
        weather_api_url="https://weather.example.test/data/2.5/weather",
        weather_api_city="Oslo",
        weather_api_key="test-key",
        weather_api_timeout=5,
        weather_data_bucket="weatherdata",
        weather_logs_table="WeatherLogs",
    )


@pytest.fixture
def object_store():
    return FakeObjectStore()


@pytest.fixture
def log_store():
    return FakeLogStore()


@pytest.fixture
def failing_object_store():
    return FakeObjectStore(fail_writes=True)
