"""
Application settings loaded from environment variables.
Uses pydantic-settings for type-safe configuration.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with defaults for development."""

    # Remote relational store. Empty means "not configured": every call is
    # served by the local store (demo mode).
    database_url: str = ""

    # Local fallback store (JSON key-value snapshot file)
    local_store_path: str = ".kiosco/local_store.json"

    # CLI profile (currentUser + cart slots for the terminal client)
    cli_profile_path: str = "~/.kiosco/profile.json"

    # JWT Configuration
    jwt_secret: str = "dev-secret-change-me-in-production"
    jwt_issuer: str = "kiosco-escolar"
    jwt_audience: str = "kiosco-escolar-users"
    jwt_access_token_expire_minutes: int = 60

    # bcrypt work factor for demo account hashes
    bcrypt_rounds: int = 12

    # Comma-separated list of allowed origins (empty uses default localhost list)
    allowed_origins: str = ""

    # Server ports
    rest_api_port: int = 8000

    # Environment
    environment: str = "development"
    debug: bool = True

    # Rate limiting
    rate_limit_enabled: bool = True
    login_rate_limit: str = "10/minute"

    # Seed demo products and accounts on startup when the stores are empty
    seed_demo_data: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def remote_configured(self) -> bool:
        """True when a remote database URL is configured (does not check liveness)."""
        return bool(self.database_url.strip())

    def cors_origins(self) -> list[str]:
        """Parse allowed_origins, falling back to the local frontend dev ports."""
        if self.allowed_origins:
            return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]
        return [
            "http://localhost:5173",  # Vite default
            "http://127.0.0.1:5173",
        ]

    def validate_production_secrets(self) -> list[str]:
        """
        Validate that secrets are properly configured for production.
        Returns a list of validation errors. Empty list means all checks pass.
        """
        errors = []

        WEAK_SECRETS = {
            "dev-secret-change-me-in-production",
            "secret",
            "password",
            "changeme",
            "default",
        }

        if self.environment == "production":
            if self.jwt_secret in WEAK_SECRETS or len(self.jwt_secret) < 32:
                errors.append(
                    "JWT_SECRET must be at least 32 characters and not a default value in production"
                )

            if self.debug:
                errors.append("DEBUG must be False in production")

            if not self.allowed_origins:
                errors.append(
                    "ALLOWED_ORIGINS must be set in production (comma-separated list of allowed domains)"
                )

            if not self.remote_configured:
                errors.append(
                    "DATABASE_URL must be set in production (local store is single-node demo storage)"
                )

        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience exports
settings = get_settings()

DATABASE_URL = settings.database_url
JWT_SECRET = settings.jwt_secret
JWT_ISSUER = settings.jwt_issuer
JWT_AUDIENCE = settings.jwt_audience
