"""
Poller configuration using pydantic-settings.

All settings are loaded from environment variables or .env file::

    SNMP_HOST=10.1.1.1
    SNMP_COMMUNITY=public
    SNMP_TIMEOUT_US=1000000
    SNMP_RETRIES=5

Mock 模式（SNMP_MOCK=true）從 SNMP_MOCK_FILE 指定的 snmpwalk dump 讀取資料，
不發送任何 UDP 封包。
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from snmp_poller.core.enums import OidOutputFormat


class Settings(BaseSettings):
    """Poller settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Target
    snmp_host: str = Field(default="127.0.0.1", description="SNMP agent host")
    snmp_community: str = Field(default="public", description="SNMP v2c community")
    snmp_port: int = Field(default=161, description="SNMP agent UDP port")

    # Transport knobs (passed through to pysnmp per request)
    snmp_timeout_us: int = Field(
        default=1_000_000,
        ge=0,
        description="Per-request timeout in microseconds",
    )
    snmp_retries: int = Field(default=5, ge=0, description="Per-request retry count")
    snmp_max_repetitions: int = Field(
        default=25,
        ge=1,
        description="GETBULK max-repetitions used while walking",
    )
    snmp_walk_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Upper bound in seconds for a whole subtree walk",
    )
    snmp_oid_output_format: OidOutputFormat = Field(
        default=OidOutputFormat.NUMERIC,
        description="Render walk OIDs with (numeric) or without (dotted) a leading dot",
    )

    # Offline replay
    snmp_mock: bool = Field(default=False, description="Replay an snmpwalk dump instead of polling")
    snmp_mock_file: str = Field(default="", description="Path of the snmpwalk dump for mock mode")

    # Application
    app_debug: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance (Singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
