"""Runtime configuration for the weather functions, read from the environment."""
import os
from typing import Optional

from pydantic import BaseModel

DEFAULT_WEATHER_API_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_WEATHER_API_CITY = "London"
DEFAULT_WEATHER_DATA_BUCKET = "weatherdata"
DEFAULT_WEATHER_LOGS_TABLE = "WeatherLogs"


class AppConfig(BaseModel):
    """Settings shared by the fetch and query functions."""
    weather_api_url: str = DEFAULT_WEATHER_API_URL
    weather_api_city: str = DEFAULT_WEATHER_API_CITY
    weather_api_key: str = ""
    weather_api_timeout: float = 20.0
    storage_endpoint_url: Optional[str] = None
    aws_region: Optional[str] = None
    weather_data_bucket: str = DEFAULT_WEATHER_DATA_BUCKET
    weather_logs_table: str = DEFAULT_WEATHER_LOGS_TABLE

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build the config from environment variables, falling back to defaults."""
        return cls(
            weather_api_url=os.environ.get("WEATHER_API_URL", DEFAULT_WEATHER_API_URL),
            weather_api_city=os.environ.get("WEATHER_API_CITY", DEFAULT_WEATHER_API_CITY),
            weather_api_key=os.environ.get("WEATHER_API_KEY", ""),
            weather_api_timeout=float(os.environ.get("WEATHER_API_TIMEOUT", "20")),
            storage_endpoint_url=os.environ.get("STORAGE_ENDPOINT_URL") or None,
            aws_region=os.environ.get("AWS_REGION") or None,
            weather_data_bucket=os.environ.get("WEATHER_DATA_BUCKET", DEFAULT_WEATHER_DATA_BUCKET),
            weather_logs_table=os.environ.get("WEATHER_LOGS_TABLE", DEFAULT_WEATHER_LOGS_TABLE),
        )

    def boto3_kwargs(self) -> dict:
        """Keyword arguments for boto3.client / boto3.resource."""
        kwargs = {}
        if self.storage_endpoint_url:
            kwargs["endpoint_url"] = self.storage_endpoint_url
        if self.aws_region:
            kwargs["region_name"] = self.aws_region
        return kwargs
