from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "LSAF HR"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"
    database_url: str = "postgresql+asyncpg://lsaf_hr:lsaf_hr@db:5432/lsaf_hr"
    create_tables_on_startup: bool = True
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:5050"]

    # Outbound mail. Without host and credentials, notifications are only logged.
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    mail_from: str = "LSAF HR System <noreply@lsafhr.local>"
    admin_email: str | None = None
    notification_queue_size: int = 1000

    # None allows approvals to drive a leave balance negative.
    leave_balance_floor: int | None = None

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_username and self.smtp_password)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
