"""Configuration management for madlib short links."""

from typing import Dict, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator

from madlib_links.common.logging_config import COMPONENT_LOGGERS, LEVELS
from madlib_links.store import ONE_YEAR_SECONDS


class Config(BaseSettings):
    """Application configuration."""

    # Storage settings
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for the short-link store (in-memory store if not set)"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=9200,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. Only 1 is meaningful with the in-memory store."
    )

    forwarded_allow_ips: str = Field(
        default="127.0.0.1",
        description="Proxies whose X-Forwarded-* headers uvicorn trusts (comma-separated, or *)"
    )

    # Short-link settings
    base_url: Optional[str] = Field(
        default=None,
        description="Public base URL for short URLs (request origin if not set)"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )

    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )

    max_collision_retries: int = Field(
        default=10,
        ge=1,
        description="Maximum attempts when generating a unique short code"
    )

    retention_seconds: int = Field(
        default=ONE_YEAR_SECONDS,
        gt=0,
        description="How long a short-link record is kept before it expires"
    )

    # Client settings
    app_url: str = Field(
        default="http://localhost:8000/",
        description="Base URL of the madlib app that share links point at"
    )

    shortener_api_url: str = Field(
        default="",
        description="Short-link API URL used by clients. Leave empty to disable short links."
    )

    shortener_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout for short-link API calls"
    )

    draft_path: str = Field(
        default="madlib-creator-draft.json",
        description="File used to keep the local creator draft"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    log_component_levels: Dict[str, str] = Field(
        default_factory=dict,
        description='Per-component log levels as JSON, e.g. {"codec": "DEBUG"}'
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in LEVELS:
            raise ValueError(f"log_level must be one of {list(LEVELS)}")
        return v_upper

    @field_validator("log_component_levels")
    @classmethod
    def validate_component_levels(cls, v: Dict[str, str]) -> Dict[str, str]:
        unknown = sorted(set(v) - set(COMPONENT_LOGGERS))
        if unknown:
            raise ValueError(f"unknown logging components: {unknown}")
        levels = {component: level.upper() for component, level in v.items()}
        bad = sorted(c for c, level in levels.items() if level not in LEVELS)
        if bad:
            raise ValueError(f"invalid log level for: {bad}")
        return levels

    @property
    def short_links_enabled(self) -> bool:
        """Whether clients should try the short-link API first."""
        return bool(self.shortener_api_url.strip())


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
