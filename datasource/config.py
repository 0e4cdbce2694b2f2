from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

DEFAULT_ENV_FILE = "env/local"
DEFAULT_TIMEZONE = "Europe/Madrid"


@dataclass(frozen=True)
class Settings:
    http_user: str = ""
    http_pass: str = ""
    timezone: str = DEFAULT_TIMEZONE
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def __post_init__(self) -> None:
        # fail at startup on an unknown zone, not on the first data request
        ZoneInfo(self.timezone)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def _split_origins(raw: str) -> tuple[str, ...]:
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build settings from the process environment.

    Values from ``env_file`` (or ``$ENV_FILE``, or ``env/local``) are loaded
    first; a missing file is ignored and real environment variables win.
    """
    load_dotenv(env_file or os.getenv("ENV_FILE", DEFAULT_ENV_FILE), override=False)
    return Settings(
        http_user=os.getenv("HTTP_USER", ""),
        http_pass=os.getenv("HTTP_PASS", ""),
        timezone=os.getenv("APP_TIMEZONE", DEFAULT_TIMEZONE),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
