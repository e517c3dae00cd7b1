"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Any, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wot_scripting.shared import EnumEnvironment, EnumInputValueType, EnumLogLevel


class ServiceSettings(BaseSettings):
    """HTTP service configuration settings."""

    title: str = Field(default="WoT Scripting Service", description="Service title")
    description: str = Field(
        default="Performs Web of Things operations on devices described "
        "by Thing Descriptions",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("SERVICE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("SERVICE_BUILD_TIME", "BUILD_TIME"),
    )
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_", case_sensitive=False, extra="ignore"
    )


class NodeSettings(BaseSettings):
    """Defaults applied to operation messages that do not set a field."""

    operation_type: Optional[str] = Field(
        default=None, description="Default operation type"
    )
    affordance_name: Optional[str] = Field(
        default=None, description="Default affordance name"
    )
    affordance_type: Optional[str] = Field(
        default=None, description="Default affordance semantic type (@type)"
    )
    filter_mode: str = Field(
        default="affordanceName", description="affordanceName, @type or both"
    )
    input_value: Optional[Any] = Field(
        default=None, description="Configured input value, preferred over payload"
    )
    input_value_type: EnumInputValueType = Field(
        default=EnumInputValueType.STRING,
        description="Decode textual input as JSON when set to json",
    )
    output_var: str = Field(default="payload", description="Output variable name")
    output_var_type: str = Field(
        default="msg", description="Output scope: msg, flow or global"
    )
    output_payload: bool = Field(
        default=False, description="Mirror results to the message payload"
    )
    cache_minutes: float = Field(
        default=15,
        ge=0,
        description="Minutes a device session stays cached, 0 for no expiry",
    )

    model_config = SettingsConfigDict(
        env_prefix="NODE_", case_sensitive=False, extra="ignore"
    )


class RuntimeSettings(BaseSettings):
    """Thing runtime configuration settings."""

    http_timeout: float = Field(
        default=30.0, description="Timeout in seconds for device interactions"
    )
    long_poll_timeout: float = Field(
        default=60.0,
        description="Timeout in seconds for observe and subscribe interactions",
    )
    verify_tls: bool = Field(
        default=True, description="Verify certificates of HTTPS devices"
    )

    model_config = SettingsConfigDict(
        env_prefix="RUNTIME_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    node: NodeSettings = Field(default_factory=NodeSettings)
    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on enviroment.
    """
    return AppSettings()
