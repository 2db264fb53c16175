"""
Parser Configuration
Loads settings from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Parser settings loaded from LISTINGS_* environment variables."""

    # Browser client (JavaScript sites)
    browser_headless: bool = True
    browser_timeout: float = 30.0
    wait_for_items: bool = True

    # Static client
    static_timeout: float = 30.0
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    accept_language: str = "fr-FR,fr;q=0.9,en;q=0.8"

    # Parsing
    html_parser: str = "html.parser"
    max_pages: Optional[int] = None

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[Path] = None

    class Config:
        env_prefix = "LISTINGS_"
        # Only load .env if it exists to avoid permission errors
        env_file = ".env" if Path(".env").exists() else None
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables


# Global settings instance
settings = Settings()
