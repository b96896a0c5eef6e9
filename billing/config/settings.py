"""
Service configuration.

Every value can be overridden from the environment (or a ``.env`` file)
using the prefix of its section, e.g. ``STORAGE_DB_NAME`` or
``REPORT_TOP_PRODUCTS_LIMIT``.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from billing.core.entities.invoice import InvoiceStatus


class StorageSettings(BaseSettings):
    """SQLite database location and pool sizing."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "billing.db"
    pool_size: int = Field(default=5, ge=1)
    busy_timeout: int = Field(default=30000, ge=0)  # ms
    backup_before_migrate: bool = True

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class LoggingSettings(BaseSettings):
    """structlog output."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["console", "json"] = "console"
    quiet_loggers: list[str] = ["aiosqlite", "uvicorn.access", "fontTools"]


class APISettings(BaseSettings):
    """HTTP adapter."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # Set by the upstream auth gateway
    tenant_header: str = "X-Tenant-ID"
    username_header: str = "X-Username"

    max_upload_size: int = 5 * 1024 * 1024


class PdfSettings(BaseSettings):
    """Seller block and currency printed on invoice PDFs."""

    model_config = SettingsConfigDict(env_prefix="PDF_")

    company_name: str = "BEST FOOD AT LOW PRICES"
    company_address: str = "Krishna Nagar Main Road, Guntur A.P. 522006"
    company_phone: str = "+91-9440262688"
    company_email: str = "info@billingcompany.com"
    footer_text: str = "Thank you for your business!"
    currency_symbol: str = "Rs."
    logo_path: str | None = None


class ReportSettings(BaseSettings):
    """Dashboard and report tuning."""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    top_products_limit: int = Field(default=5, ge=1)
    dashboard_default_days: int = Field(default=30, ge=0)

    # Counted as "pending" in the dashboard summary
    pending_statuses: list[InvoiceStatus] = [InvoiceStatus.SENT]


class Settings(BaseSettings):
    """Root settings object; sections are nested models."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Billing Service"
    app_version: str = "1.0.0"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)
    pdf: PdfSettings = Field(default_factory=PdfSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)

    @model_validator(mode="after")
    def create_data_dir(self) -> "Settings":
        self.storage.data_dir.mkdir(parents=True, exist_ok=True)
        return self


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the loaded settings so the next call re-reads the environment."""
    global _settings
    _settings = None
