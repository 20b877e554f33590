"""Application settings.

Settings are read from the environment (and an optional ``.env`` file) so the
same build can run locally and on a PaaS that only injects ``PORT``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the Storefront service."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    HOST: str = "0.0.0.0"
    PORT: int = Field(default=3000, ge=1, le=65535)

    DATA_DIR: Path = Path(".")
    PRODUCTS_FILE: str = "products.json"
    USERS_FILE: str = "users.json"

    UPLOAD_DIR: Path = Path("uploads")
    PUBLIC_DIR: Path = Path("public")

    LOG_LEVEL: str = "INFO"

    @property
    def products_path(self) -> Path:
        return self.DATA_DIR / self.PRODUCTS_FILE

    @property
    def users_path(self) -> Path:
        return self.DATA_DIR / self.USERS_FILE


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()
