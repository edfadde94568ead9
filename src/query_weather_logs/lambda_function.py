"""
GET /queryWeatherLogs?from=<datetime>&to=<datetime>

Returns every fetch log entry with from <= timestampUtc <= to.
"""
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from src.common.config import AppConfig
from src.common.errors import InvalidInputError, NotFoundError, WeatherServiceError
from src.common.models import LogEntry, to_utc
from src.common.storage import LogStore

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

JSON_HEADERS = {"Content-Type": "application/json"}


def _response(status_code: int, payload: Any) -> Dict[str, Any]:
    return {"statusCode": status_code, "headers": JSON_HEADERS, "body": json.dumps(payload)}


def _parse_datetime(value: str) -> datetime:
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(value))


def parse_date_param(params: Dict[str, Any], name: str) -> datetime:
    raw = (params or {}).get(name)
    if not raw:
        raise InvalidInputError(f"Please provide a valid '{name}' date.")
    try:
        return _parse_datetime(str(raw))
    except (ValueError, OverflowError):
        raise InvalidInputError(f"Please provide a valid '{name}' date.")


def parse_date_range(params: Dict[str, Any]) -> Tuple[datetime, datetime]:
    start = parse_date_param(params, "from")
    end = parse_date_param(params, "to")
    if start > end:
        raise InvalidInputError("'from' date cannot be greater than 'to' date.")
    return start, end


def get_weather_logs(log_store: LogStore, start: datetime, end: datetime) -> List[LogEntry]:
    """
    Raises:
        NotFoundError: If the log table has never been created
    """
    if not log_store.table_exists():
        raise NotFoundError(f"{log_store.table_name} table does not exist.")
    return log_store.query_range(start, end)


def lambda_handler(
    event: Dict[str, Any],
    context: Any,
    config: Optional[AppConfig] = None,
    log_store: Optional[LogStore] = None,
) -> Dict[str, Any]:
    """AWS Lambda handler for API Gateway proxy requests."""
    params = event.get("queryStringParameters") or {}
    logger.info(f"Weather logs requested with parameters: {params}")
    try:
        start, end = parse_date_range(params)
        config = config or AppConfig.from_env()
        log_store = log_store or LogStore.from_config(config)
        entries = get_weather_logs(log_store, start, end)
    except WeatherServiceError as e:
        if e.status_code >= 500:
            logger.error(f"Error querying weather logs: {e}", exc_info=True)
            return _response(500, {"error": "Internal server error."})
        return _response(e.status_code, {"error": str(e)})
    except Exception as e:
        logger.error(f"Error querying weather logs: {e}", exc_info=True)
        return _response(500, {"error": "Internal server error."})

    logger.info(f"Returning {len(entries)} log entries")
    return _response(200, [entry.to_item() for entry in entries])
