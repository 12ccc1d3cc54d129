"""
core/config.py -- Runtime configuration via pydantic-settings.

Every setting can come from a HOSTINV_* environment variable or a .env file
in the working directory. Command-line flags in main.py override whatever
is loaded here.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HOSTINV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    output_dir: Path = Path(".")
    # Win32_Product is slow and can trigger MSI consistency repairs.
    include_installed_products: bool = False
    # None means %SystemDrive%\Users, resolved at collection time.
    users_root: Path | None = None
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
