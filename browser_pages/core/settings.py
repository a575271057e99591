"""
Centralized settings (environment variables / .env).
"""
# @file purpose: Centralized settings using Pydantic Settings.

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BP_", env_file=".env", extra="ignore")

    # profile lookup
    setup_name: str = "default"
    configuration: str | None = None  # "package.module:attribute"

    # default Playwright driver
    browser_name: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    slow_mo_ms: int = 0
    default_timeout_ms: int = 30_000

    log_level: str = "INFO"


settings = Settings()
