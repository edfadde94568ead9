"""Common code shared across the weather Lambdas."""
from .config import AppConfig
from .errors import InvalidInputError, NotFoundError, WeatherServiceError
from .models import LogEntry, LogStatus

__all__ = ["AppConfig", "InvalidInputError", "LogEntry", "LogStatus", "NotFoundError", "WeatherServiceError"]
