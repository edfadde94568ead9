"""Tests for the log table recreation script."""
import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from src.common.recreate_table import backup_table, delete_table
from src.common.storage import LogStore


@pytest.fixture
def dynamo_log_store():
    return LogStore(MagicMock(), "WeatherLogs")


def test_backup_table_pages_through_scan(dynamo_log_store, tmp_path):
    dynamo_log_store.table.scan.side_effect = [
        {"Items": [{"rowKey": "a"}], "LastEvaluatedKey": {"rowKey": "a"}},
        {"Items": [{"rowKey": "b"}]},
    ]
    output = tmp_path / "backup.json"

    count = backup_table(dynamo_log_store, str(output))

    assert count == 2
    assert json.loads(output.read_text()) == [{"rowKey": "a"}, {"rowKey": "b"}]


def test_delete_table_waits_until_gone(dynamo_log_store):
    delete_table(dynamo_log_store)

    dynamo_log_store.client.delete_table.assert_called_once_with(TableName="WeatherLogs")
    dynamo_log_store.client.get_waiter.assert_called_once_with("table_not_exists")


def test_delete_missing_table_is_skipped(dynamo_log_store):
    dynamo_log_store.client.delete_table.side_effect = ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "missing"}}, "DeleteTable"
    )

    delete_table(dynamo_log_store)

    dynamo_log_store.client.get_waiter.assert_not_called()
