"""
ChefNotes Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments MUST set GEMINI_API_KEY and restrict CORS_ORIGINS.
    """

    # ── Google Gemini ─────────────────────────────────────────────────────
    # What: API key for Google Generative AI
    # Required: YES for recipe conversion; everything else works without it
    # How to obtain: https://aistudio.google.com/app/apikey
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key used for recipe synthesis"
    )

    # What: Which Gemini model turns voice notes into a recipe
    gemini_model: str = Field(default="gemini-2.5-flash")

    # ── Audio Payloads ────────────────────────────────────────────────────
    # What: Maximum decoded size of one audio recording, in bytes
    # Default: 10MB, roughly ten minutes of opus-in-webm voice
    # Valid range: 64KB to 50MB
    max_audio_size: int = Field(default=10_485_760, ge=65_536, le=52_428_800)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (split by cors_origins_list below)
    cors_origins: str = Field(default="http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Conversion Rate Limiting ──────────────────────────────────────────
    # What: Per-IP sliding window on convert-to-recipe calls
    # Why: Every conversion spends Gemini quota; CRUD calls are not limited
    rate_limit_requests: int = Field(default=30, ge=1, le=10000)
    rate_limit_window: int = Field(default=3600, ge=1, le=86400)  # seconds

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # GEMINI_API_KEY and gemini_api_key both work
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        Checks that the settings recipe conversion depends on are present.

        Called from the lifespan handler; raises ValueError listing every problem.
        """
        errors = []
        if not self.gemini_api_key or self.gemini_api_key == "your_gemini_api_key_here":
            errors.append(
                "GEMINI_API_KEY is not set; convert-to-recipe will fail. "
                "Get a free key at https://aistudio.google.com/app/apikey"
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
