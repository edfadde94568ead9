"""
Scheduled weather fetch.

Runs every minute via an EventBridge schedule to:
1. Call the weather provider for the configured city
2. Store the raw response body in S3 as {identifier}.json
3. Record the outcome as one row in the WeatherLogs table
"""
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

import requests

from src.common.config import AppConfig
from src.common.errors import UpstreamFailureError
from src.common.models import LogEntry, LogStatus
from src.common.storage import LogStore, ObjectStore, object_key

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

SUCCESS_MESSAGE = "Weather data retrieved and stored successfully."
HTTP_FAILURE_MESSAGE = "Failed to retrieve weather data."


def fetch_weather_payload(config: AppConfig) -> Optional[str]:
    """
    Request current weather for the configured city.

    Returns the raw response body on a 2xx response and None otherwise.

    Raises:
        UpstreamFailureError: If the provider could not be reached
    """
    params = {"q": config.weather_api_city, "appid": config.weather_api_key}
    try:
        resp = requests.get(config.weather_api_url, params=params, timeout=config.weather_api_timeout)
    except requests.RequestException as e:
        raise UpstreamFailureError(str(e)) from e
    if not resp.ok:
        logger.warning(f"Weather provider returned HTTP {resp.status_code}")
        return None
    return resp.text


def _fetch_and_store(config: AppConfig, object_store: ObjectStore, identifier: str) -> Tuple[LogStatus, str]:
    try:
        weather_data = fetch_weather_payload(config)
        if weather_data is None:
            return LogStatus.FAILURE, HTTP_FAILURE_MESSAGE

        object_store.ensure_bucket()
        object_store.put_json(object_key(identifier), weather_data)
        return LogStatus.SUCCESS, SUCCESS_MESSAGE
    except Exception as e:
        message = f"Failed to retrieve and store weather data: {e}"
        logger.error(message)
        return LogStatus.FAILURE, message


def fetch_and_store_weather(
    config: AppConfig,
    object_store: ObjectStore,
    log_store: LogStore,
    now: Optional[datetime] = None,
) -> LogEntry:
    """
    Fetch weather once, store it, and write exactly one log entry.

    Fetch and storage failures end up in the log entry. Only a failure to write
    the log entry itself is raised.
    """
    identifier = str(uuid.uuid4())
    timestamp = now or datetime.now(timezone.utc)

    status, message = _fetch_and_store(config, object_store, identifier)

    log_store.ensure_table()
    entry = LogEntry.create(identifier, timestamp, status, message)
    log_store.insert(entry)
    logger.info(f"Fetch {identifier} finished with status {status.value}")
    return entry


def lambda_handler(
    event: Dict[str, Any],
    context: Any,
    config: Optional[AppConfig] = None,
    object_store: Optional[ObjectStore] = None,
    log_store: Optional[LogStore] = None,
) -> Dict[str, Any]:
    """
    AWS Lambda handler - runs every minute via EventBridge. The event is ignored.
    """
    config = config or AppConfig.from_env()
    object_store = object_store or ObjectStore.from_config(config)
    log_store = log_store or LogStore.from_config(config)

    entry = fetch_and_store_weather(config, object_store, log_store)
    return {
        "statusCode": 200,
        "body": json.dumps(entry.to_item()),
    }
