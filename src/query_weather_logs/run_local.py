"""
Run the weather log query against the configured table.

Usage:
    python -m src.query_weather_logs.run_local --from 2024-01-01 --to 2024-01-02
"""
import argparse
import json
from datetime import datetime, timedelta, timezone

from dotenv import load_dotenv

from src.query_weather_logs.lambda_function import lambda_handler


class MockContext:
    def __init__(self):
        self.function_name = "local_lambda"
        self.memory_limit_in_mb = 128
        self.invoked_function_arn = "arn:aws:lambda:local:0:function:local_lambda"
        self.aws_request_id = "local-request-id"


if __name__ == "__main__":
    load_dotenv()

    now = datetime.now(timezone.utc)
    parser = argparse.ArgumentParser(description="List weather fetch logs in a date range")
    parser.add_argument("--from", dest="from_date", default=(now - timedelta(days=1)).isoformat())
    parser.add_argument("--to", dest="to_date", default=now.isoformat())
    args = parser.parse_args()

    # Mock event that simulates an API Gateway GET request
    event = {
        "httpMethod": "GET",
        "path": "/queryWeatherLogs",
        "queryStringParameters": {"from": args.from_date, "to": args.to_date},
    }

    response = lambda_handler(event, MockContext())

    body = json.loads(response["body"])
    print(f"Status: {response['statusCode']}")
    if isinstance(body, list):
        print(f"Entries: {len(body)}")
    print(json.dumps(body, indent=2))
