"""
Script to recreate the WeatherLogs table.

WARNING: This will DELETE all existing log entries in the table!

Usage:
    python -m src.common.recreate_table [--table-name TABLE_NAME] [--backup-first] [--force]
"""

import argparse
import json
from datetime import datetime
from typing import Optional

from botocore.exceptions import ClientError

from src.common.config import AppConfig
from src.common.storage import LogStore


def backup_table(log_store: LogStore, output_file: Optional[str] = None) -> int:
    """
    Backup all items from the log table to a JSON file.

    Args:
        log_store: Log store wrapping the table to backup
        output_file: Optional output file path (defaults to timestamped filename)

    Returns:
        Number of items backed up
    """
    if output_file is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        output_file = f'{log_store.table_name}_backup_{timestamp}.json'

    items = []
    scan_kwargs = {}

    while True:
        response = log_store.table.scan(**scan_kwargs)
        items.extend(response.get('Items', []))

        if 'LastEvaluatedKey' not in response:
            break

        scan_kwargs['ExclusiveStartKey'] = response['LastEvaluatedKey']

    with open(output_file, 'w') as f:
        json.dump(items, f, indent=2, default=str)

    print(f"Backed up {len(items)} items to {output_file}")
    return len(items)


def delete_table(log_store: LogStore) -> None:
    """Delete the log table and wait until it is gone."""
    client = log_store.client
    try:
        print(f"Deleting table {log_store.table_name}...")
        client.delete_table(TableName=log_store.table_name)

        waiter = client.get_waiter('table_not_exists')
        waiter.wait(TableName=log_store.table_name)

        print(f"Table {log_store.table_name} deleted successfully")
    except ClientError as e:
        if e.response.get('Error', {}).get('Code') != 'ResourceNotFoundException':
            raise
        print(f"Table {log_store.table_name} does not exist, skipping deletion")


def main():
    parser = argparse.ArgumentParser(
        description='Recreate the weather log table'
    )
    parser.add_argument(
        '--table-name',
        type=str,
        default=None,
        help='Table name (defaults to WEATHER_LOGS_TABLE env var or WeatherLogs)'
    )
    parser.add_argument(
        '--backup-first',
        action='store_true',
        help='Backup existing table before deletion'
    )
    parser.add_argument(
        '--force',
        action='store_true',
        help='Skip confirmation prompt'
    )

    args = parser.parse_args()

    config = AppConfig.from_env()
    if args.table_name:
        config = config.model_copy(update={'weather_logs_table': args.table_name})
    log_store = LogStore.from_config(config)

    print(f"Table name: {log_store.table_name}")
    print("\nWARNING: This will DELETE all existing data in the table!")

    if not args.force:
        confirmation = input("Are you sure you want to continue? (yes/no): ")
        if confirmation.lower() != 'yes':
            print("Aborted.")
            return

    if args.backup_first and log_store.table_exists():
        print("\nBacking up existing table...")
        backup_table(log_store)

    print("\nDeleting existing table...")
    delete_table(log_store)

    print("\nCreating new table...")
    log_store.ensure_table()

    print(f"\nTable {log_store.table_name} recreated")


if __name__ == '__main__':
    main()
