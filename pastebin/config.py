"""
Configuration module for Pastebin Lite.
Loads environment variables and provides config objects.
"""
import os
from typing import List

from dotenv import load_dotenv

from pastebin.exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

TRUTHY = ("true", "1", "yes")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in TRUTHY


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


class Settings:
    """Application settings loaded from environment variables.

    Every instance re-reads the environment, so a fresh ``Settings()`` picks
    up variables changed after import.
    """

    def __init__(self):
        self.REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
        self.REDIS_SOCKET_TIMEOUT: int = _env_int("REDIS_SOCKET_TIMEOUT", "5")
        self.MEMORY_FALLBACK: bool = _env_bool("MEMORY_FALLBACK", "True")
        self.DEBUG: bool = _env_bool("DEBUG", "False")
        self.APP_DOMAIN: str = os.getenv("APP_DOMAIN", "")
        self.TEST_MODE: bool = _env_bool("TEST_MODE", "0")
        self.PASTE_KEY_PREFIX: str = os.getenv("PASTE_KEY_PREFIX", "paste:")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.CORS_ORIGINS: List[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        if self.REDIS_SOCKET_TIMEOUT < 1:
            raise ConfigurationError("REDIS_SOCKET_TIMEOUT must be >= 1")


settings = Settings()
