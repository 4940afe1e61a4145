"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # CORS: "*" answers every origin, including preflight requests
    allowed_origins: List[str] = field(
        default_factory=lambda: _split_origins(os.getenv("ALLOWED_ORIGINS", "*"))
    )

    # Property store
    property_store: str = field(default_factory=lambda: os.getenv("PROPERTY_STORE", "memory"))
    property_store_url: str = field(default_factory=lambda: os.getenv("PROPERTY_STORE_URL", ""))
    property_store_api_key: str = field(
        default_factory=lambda: os.getenv("PROPERTY_STORE_API_KEY", "")
    )
    property_store_table: str = field(
        default_factory=lambda: os.getenv("PROPERTY_STORE_TABLE", "properties")
    )
    store_timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("STORE_TIMEOUT_SECONDS", "5.0"))
    )

    # Evaluation
    comparable_limit: int = field(default_factory=lambda: int(os.getenv("COMPARABLE_LIMIT", "5")))
    currency: str = field(default_factory=lambda: os.getenv("CURRENCY", "USD"))

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    def to_dict(self) -> dict:
        """Convert config to dictionary (secrets redacted)."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "allowed_origins": list(self.allowed_origins),
            "property_store": self.property_store,
            "property_store_url": self.property_store_url,
            "property_store_api_key": "***" if self.property_store_api_key else "",
            "property_store_table": self.property_store_table,
            "store_timeout_seconds": self.store_timeout_seconds,
            "comparable_limit": self.comparable_limit,
            "currency": self.currency,
        }
