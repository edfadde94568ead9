import json

from dotenv import load_dotenv

from src.fetch_weather.lambda_function import lambda_handler


class MockContext:
    def __init__(self):
        self.function_name = "local_lambda"
        self.memory_limit_in_mb = 128
        self.invoked_function_arn = "arn:aws:lambda:local:0:function:local_lambda"
        self.aws_request_id = "local-request-id"


if __name__ == "__main__":
    load_dotenv()

    # Mock event that simulates an EventBridge scheduled rule
    event = {
        "source": "aws.events",
        "detail-type": "Scheduled Event",
        "detail": {},
    }

    print("=" * 60)
    print("Fetching weather data locally")
    print("=" * 60)

    response = lambda_handler(event, MockContext())

    print("\nLambda response:")
    print(json.dumps(response, indent=2))
