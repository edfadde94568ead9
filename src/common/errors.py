"""Error types raised by the weather functions and mapped to HTTP status codes."""


class WeatherServiceError(Exception):
    """Base error; anything not more specific is an internal error."""
    status_code = 500


class InvalidInputError(WeatherServiceError):
    """Malformed or missing request parameter."""
    status_code = 400


class NotFoundError(WeatherServiceError):
    """Missing weather object or log table."""
    status_code = 404


class UpstreamFailureError(WeatherServiceError):
    """Weather provider could not be reached. Recorded in the fetch log, never returned."""


class StorageFailureError(WeatherServiceError):
    """S3 or DynamoDB read, write or create failed."""
