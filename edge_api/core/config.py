"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

Secrets (LLM, email and calendar API keys) are only ever read from the
environment. The resolved ``Settings`` object is handed to ``create_app`` and
passed explicitly to the clients that need it.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=False)


DEFAULT_SYSTEM_PROMPT = (
    "You are the website assistant. Be concise, professional, and helpful.\n"
    "Keep every response under 100 words: 2-4 sentences or 3-5 bullet points.\n"
    "Discover what the visitor needs, recommend matching services, share "
    "pricing ranges when relevant and guide them to the contact form for "
    "proposals. Be transparent that you are an AI assistant, not staff.\n"
    "Never promise outcomes or timelines, never give legal, financial or tax "
    "advice and never ask for passwords, API keys or other sensitive data.\n"
    "Plain text only: no markdown, emojis or special formatting."
)


class LLMSettings(BaseSettings):
    """Chat completion provider configuration."""

    provider: str = Field(
        "openai",
        description="LLM provider name (OpenAI-compatible chat completions)",
    )
    model: str = Field(
        "gpt-4o-mini",
        description="Model name used for chat replies",
    )
    api_key: str | None = Field(
        None,
        description="Provider API key; the chat endpoint answers 500 without it",
    )
    base_url: str | None = Field(
        None,
        description="Custom API endpoint for OpenAI-compatible providers",
    )
    timeout_seconds: float = Field(
        30.0,
        description="Request timeout in seconds; the call is cancelled on expiry",
        gt=0,
    )
    max_tokens: int = Field(
        1024,
        description="Maximum tokens generated per reply",
        ge=1,
    )
    system_prompt: str = Field(
        DEFAULT_SYSTEM_PROMPT,
        description="System prompt prepended to every chat request",
    )

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        case_sensitive=False,
    )


class EmailSettings(BaseSettings):
    """Transactional email provider configuration (SendGrid v3 API)."""

    api_key: str | None = Field(
        None,
        description="SendGrid API key; email endpoints answer 500 without it",
    )
    base_url: str = Field(
        "https://api.sendgrid.com",
        description="Email API base URL",
    )
    sender_email: str = Field(
        "info@example.com",
        description="From/reply-to address used for outgoing mail",
    )
    sender_name: str = Field(
        "Website",
        description="Display name used for outgoing mail",
    )
    admin_email: str = Field(
        "info@example.com",
        description="Address receiving contact and subscriber notifications",
    )
    booking_url: str = Field(
        "https://cal.com/",
        description="Link to the booking page included in welcome emails",
    )
    site_url: str = Field(
        "https://example.com",
        description="Public site URL included in email footers",
    )
    timeout_seconds: float = Field(
        10.0,
        description="Request timeout in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="EMAIL_",
        case_sensitive=False,
    )


class CalendarSettings(BaseSettings):
    """Scheduling provider configuration (Cal.com v1 API)."""

    api_key: str | None = Field(
        None,
        description="Cal.com API key; calendar endpoints answer 500 without it",
    )
    base_url: str = Field(
        "https://api.cal.com/v1",
        description="Scheduling API base URL",
    )
    timeout_seconds: float = Field(
        10.0,
        description="Request timeout in seconds",
        gt=0,
    )
    default_time_zone: str = Field(
        "America/New_York",
        description="Time zone used for bookings that do not provide one",
    )
    default_language: str = Field(
        "en",
        description="Language used for bookings that do not provide one",
    )
    availability_days: int = Field(
        7,
        description="Default availability range when endDate is omitted",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="CALENDAR_",
        case_sensitive=False,
    )


class RateLimitSettings(BaseSettings):
    """Fixed-window rate limiting configuration."""

    backend: str = Field(
        "memory",
        description="Counter store: 'memory', 'redis' or 'none' (fail open)",
    )
    redis_url: str | None = Field(
        None,
        description="Redis connection URL, required when backend is 'redis'",
    )
    window_seconds: int = Field(
        3600,
        description="Window length in seconds; also used as the record TTL",
        ge=1,
    )
    contact_limit: int = Field(
        5,
        description="Contact form submissions allowed per client per window",
        ge=1,
    )
    subscribe_limit: int = Field(
        3,
        description="Subscriptions allowed per client per window",
        ge=1,
    )
    include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* headers when throttling",
    )

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        case_sensitive=False,
    )


class CorsSettings(BaseSettings):
    """Origin allow-list and preflight caching."""

    allowed_origins: str = Field(
        "https://example.com,https://www.example.com,"
        "http://localhost:8000,http://127.0.0.1:8000,http://localhost:3000",
        description="Comma-separated list of origins echoed back to browsers",
    )
    default_origin: str = Field(
        "https://example.com",
        description="Origin returned when the request origin is not allowed",
    )
    max_age: int = Field(
        86400,
        description="Access-Control-Max-Age value in seconds",
        ge=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        case_sensitive=False,
    )

    @property
    def origins(self) -> set[str]:
        """Parsed allow-list."""
        return {o.strip() for o in self.allowed_origins.split(",") if o.strip()}


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="'json' or 'plain'")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to propagate the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    service_name: str = Field(
        "Edge API",
        description="Name reported by the health endpoint",
    )
    background_drain_timeout_seconds: float = Field(
        10.0,
        description="How long shutdown waits for pending notification tasks",
        ge=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting has an invalid value.
    Missing provider secrets are not a startup error: the affected endpoint
    answers 500 until the secret is configured.
    """

    app_env: str = APP_ENV
    llm: LLMSettings = Field(default_factory=LLMSettings)
    email: EmailSettings = Field(default_factory=EmailSettings)
    calendar: CalendarSettings = Field(default_factory=CalendarSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    log: LogSettings = Field(default_factory=LogSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


@lru_cache
def load_settings() -> Settings:
    """Build settings from the environment once per process."""

    return Settings()
