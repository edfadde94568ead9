"""
GET /queryWeatherData?guid=<identifier>

Returns the stored weather payload for one fetch.
"""
import json
import logging
import uuid
from typing import Any, Dict, Optional

from src.common.config import AppConfig
from src.common.errors import InvalidInputError, NotFoundError
from src.common.storage import ObjectStore, object_key

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

JSON_HEADERS = {"Content-Type": "application/json"}


def _response(status_code: int, payload: Any) -> Dict[str, Any]:
    return {"statusCode": status_code, "headers": JSON_HEADERS, "body": json.dumps(payload)}


def parse_guid(params: Dict[str, Any]) -> uuid.UUID:
    raw = (params or {}).get("guid")
    if not raw:
        raise InvalidInputError("Invalid or missing GUID parameter.")
    value = str(raw).strip()
    # uuid.UUID also takes the urn:uuid: form, which is not a bare identifier
    if value.lower().startswith("urn:"):
        raise InvalidInputError("Invalid or missing GUID parameter.")
    try:
        return uuid.UUID(value)
    except ValueError:
        raise InvalidInputError("Invalid or missing GUID parameter.")


def get_weather_data(object_store: ObjectStore, guid: uuid.UUID) -> Any:
    """
    Load and parse the weather payload stored for guid.

    Raises:
        NotFoundError: If no object exists for guid
    """
    key = object_key(str(guid))
    if not object_store.exists(key):
        raise NotFoundError(f"Blob with GUID '{guid}' does not exist.")
    return json.loads(object_store.get_text(key))


def lambda_handler(
    event: Dict[str, Any],
    context: Any,
    config: Optional[AppConfig] = None,
    object_store: Optional[ObjectStore] = None,
) -> Dict[str, Any]:
    """AWS Lambda handler for API Gateway proxy requests."""
    params = event.get("queryStringParameters") or {}
    logger.info(f"Weather data requested with parameters: {params}")
    try:
        guid = parse_guid(params)
    except InvalidInputError as e:
        return _response(e.status_code, {"error": str(e)})

    try:
        config = config or AppConfig.from_env()
        object_store = object_store or ObjectStore.from_config(config)
        weather_data = get_weather_data(object_store, guid)
    except NotFoundError as e:
        return _response(e.status_code, {"error": str(e)})
    except Exception as e:
        logger.error(f"Error processing blob '{guid}': {e}", exc_info=True)
        return _response(500, {"error": "Internal server error."})

    return _response(200, weather_data)
