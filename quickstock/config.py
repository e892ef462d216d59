import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load .env once per process
load_dotenv()

DEFAULT_REGION = "ap-south-1"  # Mumbai
DEFAULT_BEDROCK_MODEL = "anthropic.claude-3-sonnet-20240229-v1:0"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-lite"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    # Blank values in .env count as unset.
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return val.strip()


@dataclass(frozen=True)
class Settings:
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = DEFAULT_REGION
    bedrock_model_id: str = DEFAULT_BEDROCK_MODEL
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL

    sagemaker_forecast_endpoint: str = "quickstock-forecast-endpoint"
    dynamodb_forecast_table: str = "ForecastResults"
    dynamodb_sales_table: str = "SalesData"
    s3_raw_data_bucket: str = "quickstock-raw-data"

    cors_origins: Tuple[str, ...] = ("*",)

    @property
    def has_aws_credentials(self) -> bool:
        return bool(self.aws_access_key_id and self.aws_secret_access_key)

    @classmethod
    def from_env(cls) -> "Settings":
        origins = _env("CORS_ORIGINS", "*")
        return cls(
            aws_access_key_id=_env("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=_env("AWS_SECRET_ACCESS_KEY"),
            aws_region=_env("AWS_REGION", DEFAULT_REGION),
            bedrock_model_id=_env("BEDROCK_MODEL_ID", DEFAULT_BEDROCK_MODEL),
            gemini_api_key=_env("GEMINI_API_KEY"),
            gemini_model=_env("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            sagemaker_forecast_endpoint=_env("SAGEMAKER_FORECAST_ENDPOINT", cls.sagemaker_forecast_endpoint),
            dynamodb_forecast_table=_env("DYNAMODB_FORECAST_TABLE", cls.dynamodb_forecast_table),
            dynamodb_sales_table=_env("DYNAMODB_SALES_TABLE", cls.dynamodb_sales_table),
            s3_raw_data_bucket=_env("S3_RAW_DATA_BUCKET", cls.s3_raw_data_bucket),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read from the environment on first use."""
    return Settings.from_env()
