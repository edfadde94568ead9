"""Tests for the weather data query endpoint."""
import json
import uuid
from unittest.mock import Mock

import pytest

from src.common.errors import InvalidInputError
from src.query_weather_data.lambda_function import lambda_handler, parse_guid

STORED = '{"name": "Oslo", "weather": [{"id": 800, "main": "Clear"}], "main": {"temp": 271.4}}'


def request(params):
    return {"httpMethod": "GET", "path": "/queryWeatherData", "queryStringParameters": params}


class TestParseGuid:

    def test_valid(self):
        guid = uuid.uuid4()
        assert parse_guid({"guid": str(guid)}) == guid

    @pytest.mark.parametrize("params", [
        None,
        {},
        {"guid": ""},
        {"guid": "not-a-guid"},
        {"guid": "1234"},
        {"guid": "urn:uuid:12345678-1234-5678-1234-567812345678"},
    ])
    def test_invalid(self, params):
        with pytest.raises(InvalidInputError):
            parse_guid(params)


class TestQueryWeatherData:

    def test_invalid_guid_skips_storage(self, app_config, object_store):
        response = lambda_handler(request({"guid": "not-a-guid"}), None, app_config, object_store)

        assert response["statusCode"] == 400
        assert json.loads(response["body"]) == {"error": "Invalid or missing GUID parameter."}
        assert object_store.calls == []

    def test_missing_guid(self, app_config, object_store):
        response = lambda_handler({"queryStringParameters": None}, None, app_config, object_store)

        assert response["statusCode"] == 400
        assert object_store.calls == []

    def test_unknown_guid_not_found(self, app_config, object_store):
        guid = str(uuid.uuid4())

        response = lambda_handler(request({"guid": guid}), None, app_config, object_store)

        assert response["statusCode"] == 404
        assert guid in json.loads(response["body"])["error"]
        assert "get_text" not in object_store.calls

    def test_returns_stored_payload(self, app_config, object_store):
        guid = str(uuid.uuid4())
        object_store.objects[f"{guid}.json"] = STORED

        first = lambda_handler(request({"guid": guid}), None, app_config, object_store)
        second = lambda_handler(request({"guid": guid}), None, app_config, object_store)

        assert first["statusCode"] == 200
        assert first["headers"]["Content-Type"] == "application/json"
        assert json.loads(first["body"]) == json.loads(STORED)
        assert second["body"] == first["body"]

    def test_corrupt_payload_is_internal_error(self, app_config, object_store):
        guid = str(uuid.uuid4())
        object_store.objects[f"{guid}.json"] = "{not json"

        response = lambda_handler(request({"guid": guid}), None, app_config, object_store)

        assert response["statusCode"] == 500
        assert json.loads(response["body"]) == {"error": "Internal server error."}

    def test_storage_error_does_not_leak_details(self, app_config, object_store):
        guid = str(uuid.uuid4())
        object_store.objects[f"{guid}.json"] = STORED
        object_store.get_text = Mock(side_effect=RuntimeError("secret connection detail"))

        response = lambda_handler(request({"guid": guid}), None, app_config, object_store)

        assert response["statusCode"] == 500
        assert "secret" not in response["body"]
