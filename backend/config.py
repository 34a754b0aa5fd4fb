"""Runtime settings for the blast design backend, read from the environment."""
from __future__ import annotations

import os
import sys

from dotenv import load_dotenv
from loguru import logger

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    HOST: str = os.getenv("BLAST_HOST", "127.0.0.1")
    PORT: int = int(os.getenv("BLAST_PORT", "5000"))
    DEBUG: bool = _env_bool("BLAST_DEBUG", False)

    LOG_LEVEL: str = os.getenv("BLAST_LOG_LEVEL", "INFO")

    # Comma separated, "*" allows any origin
    CORS_ORIGINS: str = os.getenv("BLAST_CORS_ORIGINS", "*")

    @classmethod
    def cors_origins(cls) -> list[str] | str:
        if cls.CORS_ORIGINS.strip() == "*":
            return "*"
        return [o.strip() for o in cls.CORS_ORIGINS.split(",") if o.strip()]


def configure_logging(level: str | None = None) -> None:
    logger.remove()
    logger.add(sys.stderr, level=(level or Config.LOG_LEVEL).upper())
