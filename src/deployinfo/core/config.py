"""Configuration management for deployinfo."""

from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMATS = ("json", "console")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Deploy info extraction settings."""

    model_config = SettingsConfigDict(
        env_prefix="DEPLOYINFO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Build outputs
    output_group: str = Field(
        "android_deploy_info",
        description="Output group the deploy info proto is requested in",
    )
    deploy_info_suffix: str = Field(
        ".deployinfo.pb",
        description="Path suffix identifying the deploy info proto among the target outputs",
    )
    build_event_file: Optional[str] = Field(
        None,
        description="Build event protocol JSON file (--build_event_json_file)",
    )

    # Observability
    log_level: str = Field("INFO", description="Log level")
    log_format: str = Field("json", description="Log renderer: json or console")

    @validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got: {v}")
        return v

    @validator("log_format")
    def validate_log_format(cls, v: str) -> str:
        """Only the renderers setup_logging knows about are allowed."""
        v = v.lower()
        if v not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}, got: {v}")
        return v

    @validator("deploy_info_suffix")
    def validate_deploy_info_suffix(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("deploy_info_suffix cannot be empty")
        return v
