"""Configuration management for the warehouse dashboard."""

import os
from dataclasses import dataclass, field

from warehouse.exceptions import ConfigurationError


@dataclass
class BackendConfig:
    """REST backend connection configuration."""

    base_url: str = "http://localhost:3000"
    timeout_seconds: float = 10.0
    health_endpoint: str = "/health"

    def url_for(self, endpoint: str) -> str:
        """Join the base URL and an endpoint path."""
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"


@dataclass
class ListingConfig:
    """List view configuration."""

    page_size: int = 10
    recent_limit: int = 5


@dataclass
class WarehouseConfig:
    """Main configuration for the warehouse dashboard."""

    backend: BackendConfig = field(default_factory=BackendConfig)
    listing: ListingConfig = field(default_factory=ListingConfig)
    log_level: str = "INFO"
    log_format: str = "standard"
    seed: int | None = None

    @classmethod
    def from_env(cls) -> "WarehouseConfig":
        """Create config from environment variables."""
        backend = BackendConfig(
            base_url=os.getenv("BACKEND_URL", "http://localhost:3000"),
            timeout_seconds=_positive("BACKEND_TIMEOUT", float, 10.0),
            health_endpoint=os.getenv("BACKEND_HEALTH_ENDPOINT", "/health"),
        )

        listing = ListingConfig(
            page_size=_positive("PAGE_SIZE", int, 10),
            recent_limit=_positive("RECENT_LIMIT", int, 5),
        )

        seed = os.getenv("SEED")
        return cls(
            backend=backend,
            listing=listing,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            seed=int(seed) if seed else None,
        )


def _positive(name: str, cast: type, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value
