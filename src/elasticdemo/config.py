from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from elasticdemo.exceptions import ConfigError


class AppConfig(BaseModel):
    """Application-specific configuration values."""

    log_level: str = "INFO"
    # Transport settings for FastMCP: "stdio" (default), "http", or "sse"
    transport: Literal["stdio", "http", "sse"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000


class ElasticsearchConfig(BaseModel):
    """Search engine connection values."""

    uri: str = "http://localhost:9200"
    file_index: str = "epfiles"
    catalog_index: str = "books"
    username: Optional[str] = None
    password: Optional[str] = None  # password or API secret for basic auth
    verify_ssl: bool = True
    request_timeout: float = Field(default=30.0, gt=0)
    # elastic-transport node implementation; "httpxasync" keeps the stack on httpx
    node_class: str = "httpxasync"


class ConsistencyConfig(BaseModel):
    """Polling used to wait for writes to become searchable."""

    interval: float = Field(default=0.1, ge=0)
    timeout: float = Field(default=30.0, gt=0)
    max_attempts: Optional[int] = Field(default=None, ge=1)


class DemoConfig(BaseModel):
    """Sizes of the generated demo collections."""

    file_count: int = Field(default=10, ge=1)
    catalog_count: int = Field(default=10, ge=1)


class Settings(BaseSettings):
    """Top-level settings loaded from environment variables and .env only."""

    model_config = SettingsConfigDict(
        env_prefix="ELASTICDEMO_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app: AppConfig = AppConfig()
    elasticsearch: ElasticsearchConfig = ElasticsearchConfig()
    consistency: ConsistencyConfig = ConsistencyConfig()
    demo: DemoConfig = DemoConfig()


def load_settings() -> Settings:
    """Load settings from environment variables and .env only."""
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
