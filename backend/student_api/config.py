"""
Student API — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
       Fails fast if the token signing secret is missing.
How:   Pydantic Settings reads from environment variables (or .env file) and
       validates types/ranges. The resulting object is handed explicitly to
       create_app(); nothing reads the environment at import time.
Who:   Built by the `student-api` entry point (or by tests) and stored on
       `app.state.settings`.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Only JWT_SECRET has no usable default; everything else works against a
    local MongoDB out of the box.
    """

    # ── Token Signing ─────────────────────────────────────────────────────
    # Required: YES. An empty secret would make every token forgeable.
    jwt_secret: str = Field(default="", description="HMAC secret for signing bearer tokens")
    jwt_algorithm: str = Field(default="HS256")
    # Tokens live one hour unless overridden
    jwt_expires_minutes: int = Field(default=60, ge=1, le=1440)

    # ── Database ──────────────────────────────────────────────────────────
    mongo_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string",
    )
    database_name: str = Field(default="studentDB")

    # ── Password Hashing ──────────────────────────────────────────────────
    # bcrypt cost factor; each +1 doubles hashing time
    bcrypt_rounds: int = Field(default=10, ge=4, le=15)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = Field(default="INFO")

    # Comma-separated list, parsed by cors_origins_list
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required(self) -> None:
        """
        What:  Validates that settings without safe defaults are configured.
        When:  Called by create_app() before any route is registered.
        Why:   A server that cannot sign tokens must not start at all.

        Raises:
            ValueError listing every missing setting.
        """
        errors = []
        if not self.jwt_secret.strip():
            errors.append("JWT_SECRET is not set. Generate one with `openssl rand -hex 32`.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


def load_settings() -> Settings:
    """Reads settings from the process environment and validates them."""
    settings = Settings()
    settings.validate_required()
    return settings
