"""
Configuration management for NAVI SDK.

This module provides NaviSettings, which loads SDK configuration from
environment variables, .env files and defaults.

Environment variables use the NAVI_ prefix.
Example: NAVI_ENV=dev
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from navi_sdk import __version__

DEFAULT_BASE_URL = "https://open-api.naviprotocol.io"

# Freshness window (ms) used when a lookup reuses a cached list.
DEFAULT_CACHE_TIME = 5 * 60 * 1000

Env = Literal["dev", "test", "prod"]


class NaviSettings(BaseSettings):
    """
    Configuration settings for NAVI SDK with environment variable support.

    Example:
        # From environment
        export NAVI_ENV=dev
        export NAVI_TIMEOUT=10

        # In code
        settings = NaviSettings()
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=30.0, gt=0)
    transport: str = "httpx"  # can also be 'aiohttp' or 'requests'
    env: Env = "prod"
    retry_attempts: int = Field(default=3, ge=1)
    user_agent: str = f"navi-sdk/{__version__}"

    model_config = SettingsConfigDict(
        env_prefix="NAVI_", env_file=".env", extra="ignore"
    )
