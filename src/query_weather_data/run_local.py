"""
Run the weather data query against the configured bucket.

Usage:
    python -m src.query_weather_data.run_local <guid>
"""
import argparse
import json

from dotenv import load_dotenv

from src.query_weather_data.lambda_function import lambda_handler


class MockContext:
    def __init__(self):
        self.function_name = "local_lambda"
        self.memory_limit_in_mb = 128
        self.invoked_function_arn = "arn:aws:lambda:local:0:function:local_lambda"
        self.aws_request_id = "local-request-id"


if __name__ == "__main__":
    load_dotenv()

    parser = argparse.ArgumentParser(description="Query a stored weather payload by GUID")
    parser.add_argument("guid", help="Identifier the payload was stored under")
    args = parser.parse_args()

    # Mock event that simulates an API Gateway GET request
    event = {
        "httpMethod": "GET",
        "path": "/queryWeatherData",
        "queryStringParameters": {"guid": args.guid},
    }

    response = lambda_handler(event, MockContext())

    print(f"Status: {response['statusCode']}")
    print(json.dumps(json.loads(response["body"]), indent=2))
