"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

Each concern gets its own BaseSettings class so it can be instantiated and
tested on its own; AppSettings composes them in a model_validator.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import EmailStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: str
    db_name: str = "portfolio"


class RedisSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Optional; without Redis the rate limiter is disabled
    redis_uri: Optional[str] = None


class JWTSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    jwt_issuer: str = "portfolio-api"
    jwt_audience: str = "portfolio-admin"
    access_token_ttl_seconds: int = 86400

    # RS256 keys (preferred)
    jwt_private_key: str = ""
    jwt_public_key: str = ""

    # HS256 fallback (used when RS256 keys are absent)
    jwt_secret: str = ""

    @property
    def use_rs256(self) -> bool:
        return bool(self.jwt_private_key and self.jwt_public_key)


class LockoutSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    max_login_attempts: int = 5
    lock_duration_seconds: int = 2 * 60 * 60
    password_reset_ttl_seconds: int = 60 * 60


class EmailSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    email_backend: Literal["smtp", "zeptomail"] = "smtp"
    email_from: str = "noreply@example.com"
    email_from_name: str = "Portfolio"
    # Inbox that receives contact-form notifications
    email_admin_inbox: str = ""

    zepto_api_token: str = ""


class SmtpSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_timeout_seconds: float = 10.0

    @property
    def use_ssl(self) -> bool:
        return self.smtp_port == 465


class AdminBootstrapSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    admin_email: EmailStr = "admin@example.com"
    admin_password: str = "admin123"
    admin_name: str = "Admin"


class UploadSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    upload_dir: str = "uploads"
    max_file_size: int = 5 * 1024 * 1024


class RateLimitSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60
    # Stricter budgets for unauthenticated write endpoints
    login_rate_limit: int = 10
    contact_rate_limit: int = 5


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1
    sentry_profile_sample_rate: float = 0.05


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_name: str = "Portfolio API"
    # Public base URL of this API; used to build upload URLs
    base_url: str = "http://localhost:5000"
    # Front-end origin; used in password reset links
    frontend_url: str = "http://localhost:3000"

    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5000"]

    # Seed sample skills/achievements into empty collections on startup
    seed_sample_content: bool = True

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    db: Optional[DatabaseSettings] = None
    redis: Optional[RedisSettings] = None
    jwt: Optional[JWTSettings] = None
    lockout: Optional[LockoutSettings] = None
    email: Optional[EmailSettings] = None
    smtp: Optional[SmtpSettings] = None
    admin: Optional[AdminBootstrapSettings] = None
    upload: Optional[UploadSettings] = None
    rate_limit: Optional[RateLimitSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.db is None:
            self.db = DatabaseSettings()
        if self.redis is None:
            self.redis = RedisSettings()
        if self.jwt is None:
            self.jwt = JWTSettings()
        if self.lockout is None:
            self.lockout = LockoutSettings()
        if self.email is None:
            self.email = EmailSettings()
        if self.smtp is None:
            self.smtp = SmtpSettings()
        if self.admin is None:
            self.admin = AdminBootstrapSettings()
        if self.upload is None:
            self.upload = UploadSettings()
        if self.rate_limit is None:
            self.rate_limit = RateLimitSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
