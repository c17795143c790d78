"""
DiagramScholar Configuration Module

Settings are read from the environment, with ``.env`` support via python-dotenv.

Environment Variables:
    GEMINI_API_KEY: Google Gemini API key (required to call the model)
    DIAGRAM_SCHOLAR_MODEL: Model name (default: gemini-2.5-flash)
    DIAGRAM_SCHOLAR_QUIZ_SIZE: Questions per quiz (default: 3)
    DIAGRAM_SCHOLAR_MAX_UPLOAD_MB: Upload size limit in megabytes (default: 20)
    DIAGRAM_SCHOLAR_LOG_LEVEL: Logging level (default: INFO)
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from .errors import ConfigurationError

# Load variables from .env
load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_QUIZ_SIZE = 3
DEFAULT_MAX_UPLOAD_MB = 20
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    model: str = DEFAULT_MODEL
    quiz_size: int = DEFAULT_QUIZ_SIZE
    max_upload_mb: int = DEFAULT_MAX_UPLOAD_MB
    log_level: str = "INFO"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def get_settings() -> Settings:
    """Builds Settings from the current environment."""
    return Settings(
        api_key=os.getenv("GEMINI_API_KEY") or None,
        model=os.getenv("DIAGRAM_SCHOLAR_MODEL") or DEFAULT_MODEL,
        quiz_size=_int_from_env("DIAGRAM_SCHOLAR_QUIZ_SIZE", DEFAULT_QUIZ_SIZE),
        max_upload_mb=_int_from_env("DIAGRAM_SCHOLAR_MAX_UPLOAD_MB", DEFAULT_MAX_UPLOAD_MB),
        log_level=(os.getenv("DIAGRAM_SCHOLAR_LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Attaches a stream handler to the package logger once."""
    logger = logging.getLogger("diagramscholar")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
