"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import List, Protocol


@dataclass
class APIConfig:
    """API configuration."""
    cors_origins: List[str]

    @property
    def allow_all_origins(self) -> bool:
        """Check if CORS is open to every origin."""
        return "*" in self.cors_origins


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        origins = os.getenv("CORS_ORIGINS", "*").split(",")
        return APIConfig(
            cors_origins=[origin.strip() for origin in origins if origin.strip()],
        )
