"""
Configuration management for the compression service.

Provides typed configuration classes with environment variable
injection and validation.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Dict, Any


@dataclass
class ObservabilityConfig:
    """Observability configuration."""
    log_level: str = field(default_factory=lambda: os.getenv("TSC_LOG_LEVEL", "info"))
    log_format: str = field(default_factory=lambda: os.getenv("TSC_LOG_FORMAT", "json"))


@dataclass
class ServiceConfig:
    """Base service configuration."""
    service_name: str
    environment: str = field(default_factory=lambda: os.getenv("TSC_ENV", "local"))
    config_path: str = field(default_factory=lambda: os.getenv("TSC_CONFIG_PATH", "config.yaml"))

    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.service_name:
            raise ValueError("service_name is required")

        if self.environment not in ["local", "dev", "staging", "prod"]:
            raise ValueError(f"Invalid environment: {self.environment}")

        if self.observability.log_format not in ["json", "console"]:
            raise ValueError(f"Invalid log format: {self.observability.log_format}")

    @classmethod
    def from_env(cls, service_name: str) -> "ServiceConfig":
        """Create configuration from environment variables."""
        return cls(service_name=service_name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "service_name": self.service_name,
            "environment": self.environment,
            "config_path": self.config_path,
            "observability": {
                "log_level": self.observability.log_level,
                "log_format": self.observability.log_format,
            },
        }
