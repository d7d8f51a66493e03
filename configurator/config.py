"""
Configurator Settings
=====================

Single source of truth for all configuration values.
Reads from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field


@dataclass
class StorefrontAPIConfig:
    """Storefront API endpoint used for catalog fetch and selection submit."""
    base_url: str = "http://localhost:3000"
    timeout: float = 15.0

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)


@dataclass
class ConfiguratorConfig:
    """Master configuration for the package configurator."""

    api: StorefrontAPIConfig = field(default_factory=StorefrontAPIConfig)

    # Wizard settings
    step_delay_seconds: float = 1.0  # save-and-continue latency shown as busy state
    default_currency: str = "USD"

    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls) -> "ConfiguratorConfig":
        """Load configuration from environment variables."""
        return cls(
            api=StorefrontAPIConfig(
                base_url=os.environ.get("CONFIGURATOR_API_URL", "http://localhost:3000"),
                timeout=float(os.environ.get("CONFIGURATOR_API_TIMEOUT", "15")),
            ),
            step_delay_seconds=float(os.environ.get("CONFIGURATOR_STEP_DELAY", "1.0")),
            default_currency=os.environ.get("CONFIGURATOR_DEFAULT_CURRENCY", "USD"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            log_format=os.environ.get("LOG_FORMAT", "json"),
        )
