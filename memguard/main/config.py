"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from memguard.shared import (
    DEFAULT_FALLBACK_LIMIT_MB,
    DEFAULT_HEAP_LIMIT_PERCENT,
    EnumEnvironment,
    EnumLogLevel,
)
from memguard.shared.env import load_secret_file_variables  # noqa: F401


class WorkloadSettings(BaseSettings):
    """Allocation loop configuration."""

    allocation_size_mb: float = Field(
        default=10,
        gt=0,
        description="Size of each allocation in MB",
        validation_alias=AliasChoices("WORKLOAD_ALLOCATION_SIZE_MB", "ALLOCATION_SIZE_MB"),
    )
    interval_seconds: float = Field(
        default=2,
        ge=0,
        description="Pause between allocations",
        validation_alias=AliasChoices(
            "WORKLOAD_INTERVAL_SECONDS", "ALLOCATION_INTERVAL_SECONDS"
        ),
    )
    enabled: bool = Field(
        default=True,
        description="Start the allocation loop with the service",
        validation_alias=AliasChoices("WORKLOAD_ENABLED"),
    )
    enforce_heap_limit: bool = Field(
        default=True,
        description="Treat the heap budget as an allocation ceiling",
        validation_alias=AliasChoices("WORKLOAD_ENFORCE_HEAP_LIMIT"),
    )

    model_config = SettingsConfigDict(
        env_prefix="WORKLOAD_", case_sensitive=False, extra="ignore"
    )


class RuntimeSettings(BaseSettings):
    """Runtime and container environment flags."""

    heap_limit_percent: float = Field(
        default=DEFAULT_HEAP_LIMIT_PERCENT,
        gt=0,
        le=100,
        description="Heap budget as a percentage of the container limit",
        validation_alias=AliasChoices("RUNTIME_HEAP_LIMIT_PERCENT", "HEAP_LIMIT_PERCENT"),
    )
    running_in_container: bool = Field(
        default=False,
        description="Whether the process was started as container-aware",
        validation_alias=AliasChoices(
            "RUNTIME_RUNNING_IN_CONTAINER", "RUNNING_IN_CONTAINER"
        ),
    )
    server_mode: bool = Field(
        default=False,
        description="Collector server mode flag, reported only",
        validation_alias=AliasChoices("RUNTIME_SERVER_MODE", "GC_SERVER_MODE"),
    )
    fallback_limit_mb: float = Field(
        default=DEFAULT_FALLBACK_LIMIT_MB,
        gt=0,
        description="Limit assumed when none can be detected",
        validation_alias=AliasChoices("RUNTIME_FALLBACK_LIMIT_MB"),
    )
    cgroup_root: str = Field(
        default="/sys/fs/cgroup",
        description="Mount point of the cgroup filesystem",
        validation_alias=AliasChoices("RUNTIME_CGROUP_ROOT"),
    )

    model_config = SettingsConfigDict(
        env_prefix="RUNTIME_", case_sensitive=False, extra="ignore"
    )


class AssessmentSettings(BaseSettings):
    """Periodic assessment loop configuration."""

    interval_seconds: float = Field(
        default=10, gt=0, description="Cadence of the assessment loop"
    )
    backoff_seconds: float = Field(
        default=30, gt=0, description="Wait after a failed assessment cycle"
    )

    model_config = SettingsConfigDict(
        env_prefix="ASSESSMENT_", case_sensitive=False, extra="ignore"
    )


class ServiceSettings(BaseSettings):
    """Service metadata and HTTP binding."""

    title: str = Field(default="memguard", description="Service title")
    description: str = Field(
        default="Container memory pressure workload and health assessment service",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("APP_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("APP_BUILD_TIME", "BUILD_TIME"),
    )
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8080, description="Port to bind the server")

    model_config = SettingsConfigDict(
        env_prefix="APP_", case_sensitive=False, extra="ignore"
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

    workload: WorkloadSettings = Field(default_factory=WorkloadSettings)
    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)
    assessment: AssessmentSettings = Field(default_factory=AssessmentSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

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

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()
