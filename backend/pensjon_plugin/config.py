import os
import logging
from typing import Optional
from pydantic import BaseModel
from dotenv import load_dotenv

from pensjon_plugin.integrations.errors import IntegrationError

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    norsk_pensjon_url: str
    log_level: str = "INFO"


def resolve_log_level(name: str) -> int:
    """Numeric level for a LOG_LEVEL name; unknown names are a configuration error."""
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise IntegrationError(f"LOG_LEVEL {name!r} is not a known logging level.")
    return level


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Read settings from the environment, after loading a .env file if present."""
    load_dotenv(env_file)

    url = (os.getenv("NORSK_PENSJON_URL") or "").strip()
    if not url:
        raise IntegrationError("NORSK_PENSJON_URL not set. Please add it to your .env file.")

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    resolve_log_level(log_level)

    settings = Settings(norsk_pensjon_url=url, log_level=log_level)
    logger.info(f"Norsk Pensjon upstream configured: {settings.norsk_pensjon_url}")
    return settings
