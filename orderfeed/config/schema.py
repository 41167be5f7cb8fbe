"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, SecretStr

from orderfeed.execution.invest_client import DEFAULT_APP_NAME, SANDBOX_REST_URL


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = SANDBOX_REST_URL
    token: SecretStr = SecretStr("")  # falls back to INVEST_TOKEN
    app_name: str = DEFAULT_APP_NAME
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: LogLevel = LogLevel.INFO


class OrderFeedConfig(BaseModel):
    model_config = {"extra": "forbid"}

    account_id: str = Field(min_length=1)
    api: ApiConfig = ApiConfig()
    logging: LoggingConfig = LoggingConfig()
