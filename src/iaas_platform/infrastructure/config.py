"""Configuration management for the provisioning service."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """Server store configuration."""

    backend: Literal["json", "memory"] = Field(default="json", description="Repository backend")
    store_path: Path = Field(
        default=Path("/var/lib/iaas_platform/servers.json"), description="JSON store file"
    )
    fsync: bool = Field(default=True, description="fsync the store on every write")


class ProvisioningConfig(BaseModel):
    """Default sizing for new servers."""

    default_cpu_cores: int = Field(default=1, ge=1, description="Default vCPU count")
    default_ram_gb: int = Field(default=1, ge=1, description="Default memory in GB")
    default_storage_gb: int = Field(default=10, ge=1, description="Default boot volume in GB")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    metrics_port: int = Field(default=8003, ge=1, le=65535, description="Prometheus metrics port")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="iaas_platform", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for the provisioning service."""

    model_config = SettingsConfigDict(
        env_prefix="IAAS_PLATFORM_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    provisioning: ProvisioningConfig = Field(default_factory=ProvisioningConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def ensure_directories(self) -> None:
        """Ensure the store directory exists."""
        if self.storage.backend == "json":
            self.storage.store_path.parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    config = Config()
    config.ensure_directories()
    return config
