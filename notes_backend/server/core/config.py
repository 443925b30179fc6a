"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.

Grouped settings (mail, CORS) are nested models populated from variables that use
a double underscore delimiter, e.g. ``MAIL__SMTP_HOST`` or ``CORS__ORIGINS``.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class MailConfig(BaseModel):
    """Outgoing mail configuration."""

    backend: Literal["log", "smtp"] = Field(
        default="log", description="Mail transport: 'log' writes messages to the log, 'smtp' delivers them"
    )
    from_address: str = Field(default="no-reply@notes.local", description="Sender address for outgoing mail")
    from_name: str = Field(default="Notes", description="Sender display name for outgoing mail")
    smtp_host: str = Field(default="localhost", description="SMTP server host address")
    smtp_port: int = Field(default=587, ge=1, le=65535, description="SMTP server port number")
    smtp_username: Optional[str] = Field(default=None, description="SMTP login user (optional)")
    smtp_password: Optional[str] = Field(default=None, description="SMTP login password (optional)")
    smtp_starttls: bool = Field(default=True, description="Upgrade the SMTP connection with STARTTLS")
    smtp_timeout: float = Field(default=10.0, gt=0, description="SMTP socket timeout in seconds")


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(
        default=["http://localhost:3000"], description="Allowed CORS origins (the frontend URL by default)"
    )
    allow_credentials: bool = Field(default=True, description="Allow credentials in CORS requests")
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE"], description="Allowed HTTP methods"
    )
    allow_headers: list[str] = Field(
        default=["Authorization", "Accept", "Content-Type"], description="Allowed HTTP headers"
    )


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
        populate_by_name=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Server host address to bind to",
        alias="SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number",
        alias="PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Server logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="LOG_LEVEL",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="postgresql+asyncpg://postgres:postgres@db:5432/notes",
        description="Async PostgreSQL connection URL for application database",
        alias="DATABASE_URL",
    )

    # =====================================================================
    # Authentication Configuration
    # =====================================================================
    jwt_secret: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for signing JWT access tokens",
        alias="JWT_SECRET_KEY",
    )
    jwt_maxage: int = Field(
        default=60,
        ge=1,
        description="Lifetime of access tokens and the token cookie, in minutes",
        alias="JWT_MAXAGE",
    )
    verification_token_ttl_hours: int = Field(
        default=24,
        ge=1,
        description="Lifetime of e-mail verification tokens, in hours",
        alias="VERIFICATION_TOKEN_TTL_HOURS",
    )
    reset_token_ttl_minutes: int = Field(
        default=30,
        ge=1,
        description="Lifetime of password reset tokens, in minutes",
        alias="RESET_TOKEN_TTL_MINUTES",
    )
    cookie_secure: bool = Field(
        default=False,
        description="Mark the token cookie as Secure (enable behind HTTPS)",
        alias="COOKIE_SECURE",
    )

    # =====================================================================
    # Public URLs
    # =====================================================================
    api_url: str = Field(
        default="http://localhost:8000",
        description="Public base URL of this backend, used in verification links",
        alias="API_URL",
    )
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Public base URL of the frontend, used for redirects and reset links",
        alias="FRONTEND_URL",
    )

    # =====================================================================
    # Grouped Configurations
    # =====================================================================
    mail: MailConfig = Field(default_factory=MailConfig, description="Outgoing mail configuration")
    cors: CORSConfig = Field(default_factory=CORSConfig, description="CORS configuration")

    @property
    def token_cookie_max_age(self) -> int:
        """Max-Age of the token cookie in seconds."""
        return self.jwt_maxage * 60


settings = Settings()
