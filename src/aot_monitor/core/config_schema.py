"""
Configuration schema and validation for the AOT account monitor.
"""

from enum import Enum
from typing import Any, Optional

import pytz
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator


class SortKey(str, Enum):
    """Selectable account sort keys."""

    EQUITY = "equity"
    DRAWDOWN = "drawdown"
    NAME = "name"


class SortDirection(str, Enum):
    """Sort directions."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class LogLevel(str, Enum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SourceConfig(BaseModel):
    """Account collection source (Supabase / PostgREST) configuration."""

    url: Optional[str] = Field(default=None, description="Project base URL")
    api_key: Optional[str] = Field(default=None, description="Anon or service key")
    table: str = Field(default="trading_accounts", description="Account table name")
    timeout: int = Field(default=15, ge=1, le=120, description="Request timeout in seconds")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        """Validate and normalize the base URL."""
        if v in (None, ""):
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid source url: {v}. Must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v):
        """Treat placeholder keys as unset."""
        if v and v in ["your_supabase_anon_key_here", ""]:
            return None
        return v


class PriceFeedConfig(BaseModel):
    """External price poll configuration."""

    enabled: bool = Field(default=True, description="Whether the price poll runs")
    url: str = Field(
        default="https://api.binance.com/api/v3/ticker/price",
        description="Price endpoint",
    )
    symbol: str = Field(default="PAXGUSDT", description="Fixed symbol to quote")
    price_field: str = Field(default="price", description="JSON field holding the price")
    interval: int = Field(default=30, ge=1, le=3600, description="Poll interval in seconds")
    timeout: int = Field(default=10, ge=1, le=120, description="Request timeout in seconds")


class StalenessConfig(BaseModel):
    """Staleness classifier thresholds, in seconds."""

    threshold_seconds: int = Field(default=180, ge=1, description="Offline threshold")
    skew_trigger_seconds: int = Field(
        default=20000, ge=1, description="Raw diff above which skew correction applies"
    )
    skew_offset_seconds: int = Field(
        default=25200, ge=0, description="Assumed writer clock offset (7 hours)"
    )

    @model_validator(mode="after")
    def validate_skew(self):
        """The skew trigger must sit above the offline threshold."""
        if self.skew_trigger_seconds <= self.threshold_seconds:
            raise ValueError(
                f"skew_trigger_seconds ({self.skew_trigger_seconds}) must be greater "
                f"than threshold_seconds ({self.threshold_seconds})"
            )
        return self


class MonitorConfig(BaseModel):
    """Refresh/clock loop configuration."""

    tick_interval: int = Field(default=10, ge=1, le=600, description="Staleness tick in seconds")
    display_timezone: str = Field(
        default="Asia/Bangkok", description="Timezone used to render sync times"
    )

    @field_validator("display_timezone")
    @classmethod
    def validate_timezone(cls, v):
        """Validate the IANA timezone name."""
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v


class ViewConfig(BaseModel):
    """Default view ordering."""

    sort_key: Optional[SortKey] = Field(default=None, description="None means default ordering")
    sort_direction: SortDirection = Field(default=SortDirection.ASCENDING)


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")


class LoggingConfig(BaseModel):
    """Logging configuration schema."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Log level")
    file: Optional[str] = Field(default=None, description="Log file path")
    rotation: str = Field(default="10 MB", description="Log rotation")
    retention: str = Field(default="1 week", description="Log retention")
    format: Optional[str] = Field(default=None, description="Custom loguru format")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v


class AOTMonitorConfig(BaseModel):
    """Root configuration schema."""

    source: SourceConfig = Field(default_factory=SourceConfig)
    price_feed: PriceFeedConfig = Field(default_factory=PriceFeedConfig)
    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    staleness: StalenessConfig = Field(default_factory=StalenessConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}


def validate_config_dict(config: dict[str, Any]) -> AOTMonitorConfig:
    """Validate a configuration dictionary.

    Args:
        config: Raw configuration dictionary

    Returns:
        Validated configuration object

    Raises:
        ValueError: If the configuration does not match the schema
    """
    try:
        return AOTMonitorConfig(**config)
    except ValidationError as e:
        raise ValueError(str(e)) from e
