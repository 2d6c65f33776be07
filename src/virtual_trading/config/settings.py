"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".virtual-trading"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Virtual Trading Ledger"
    app_version: str = "0.1.0"

    # Data directory (SQLite file lives here unless database_url is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None
    storage_backend: Literal["sqlite", "memory"] = "sqlite"

    log_level: str = "INFO"

    # Ledger rules
    initial_balance: Decimal = Decimal("1000000")
    base_currency: str = "INR"
    default_display_currency: str = "INR"
    crypto_quantity_step: Decimal = Decimal("0.00000001")
    stock_quantity_step: Decimal = Decimal("1")

    # Execute at a freshly fetched oracle price instead of the order's quote
    reprice_orders: bool = False

    # Market data settings
    price_cache_ttl_seconds: float = 30
    price_fetch_timeout_seconds: float = 10
    fx_cache_ttl_seconds: float = 300

    # Used when a request carries no X-User-ID header
    default_user_id: str = "guest"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "virtual_trading.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
