from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jokes_app.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent  # jokes-app/


class Settings(BaseSettings):
    """Application settings with validation.

    The session secret is required and will raise a validation error if
    missing. Secrets must be provided via environment variables or .env file.
    """

    # API server settings
    api_host: str = Field(min_length=1, default="127.0.0.1", description="API server host (e.g., '0.0.0.0')")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")
    public_base_url: str = Field(
        default="http://localhost:8000",
        pattern=r"^https?://",
        description="Absolute base URL used for links in the RSS feed",
    )

    # Database
    database_url: str = Field(
        min_length=1,
        default=f"sqlite:///{BASE_DIR / 'jokes.db'}",
        description="SQLAlchemy database URL",
    )
    seed_demo_data: bool = Field(default=False, description="Seed the demo user and jokes on startup")

    # Sessions - required
    session_secret: str = Field(min_length=16, description="Secret used to sign session cookies")
    session_cookie_name: str = Field(min_length=1, default="RJ_session", description="Session cookie name")
    session_max_age_seconds: int = Field(ge=60, default=60 * 60 * 24 * 30, description="Session lifetime")
    session_cookie_secure: bool = Field(default=False, description="Only send the session cookie over HTTPS")

    # Security
    cors_origins: str = Field(default="http://localhost:8000", description="Comma-separated CORS origins")
    trusted_hosts: str = Field(default="*", description="Comma-separated trusted host patterns")
    login_rate_limit: str = Field(default="10/minute", description="Rate limit for login attempts per IP")

    # Feed
    rss_item_limit: int = Field(ge=1, le=1000, default=100, description="Maximum number of jokes in the RSS feed")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @field_validator("session_secret", mode="after")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        """Reject secrets that are only whitespace."""
        if not v.strip():
            raise ValueError("session_secret must not be blank")
        return v

    @field_validator("public_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


# Singleton settings instance
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    This function creates a singleton to avoid re-reading .env file
    on every request. Use this with FastAPI's Depends() for
    dependency injection.

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
        log_with_context(
            logger,
            "debug",
            "Settings loaded",
            database_url=_settings_instance.database_url.split("@")[-1],
            event_type="config_loaded",
        )
    return _settings_instance
