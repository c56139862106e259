"""Application configuration."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shamir_service.core.field import is_probable_prime

# Mersenne prime M127; secrets up to 126 bits (any 15-byte value) fit below it
DEFAULT_FIELD_MODULUS = (1 << 127) - 1


class Settings(BaseSettings):
    """Application settings loaded from environment variables (prefix ``SSS_``)."""

    # Environment
    environment: str = "development"  # development, staging, production

    # Prime defining the field. Caps the largest secret that can be shared,
    # so deployments must size it to their secret domain.
    field_modulus: int = DEFAULT_FIELD_MODULUS

    # Upper bound on n for a single split
    max_shares: int = 255

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Logging
    log_level: str = "INFO"
    log_json: bool = False  # JSON output for log aggregation

    # Prometheus /metrics endpoint
    metrics_enabled: bool = True

    # Comma-separated list of allowed CORS origins (empty disables CORS)
    cors_origins: str = ""

    model_config = SettingsConfigDict(env_prefix="SSS_", env_file=".env", case_sensitive=False)

    @field_validator("field_modulus")
    @classmethod
    def _check_modulus(cls, value: int) -> int:
        """Reject moduli that do not define a field."""
        if value <= 2 or not is_probable_prime(value):
            raise ValueError(f"field_modulus must be a prime greater than 2, got {value}")
        return value

    @field_validator("max_shares")
    @classmethod
    def _check_max_shares(cls, value: int) -> int:
        if value < 2:
            raise ValueError("max_shares must be at least 2")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
