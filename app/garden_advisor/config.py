# garden_advisor/config.py

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --------------------------------
# Defaults
# --------------------------------

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.5
DEFAULT_MAX_QUESTIONS = 10
DEFAULT_SUMMARY_TIMEOUT = 20.0
DEFAULT_LOG_LEVEL = "INFO"

_FALSY = ("0", "false", "no", "off")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r; using %s", name, raw, default)
        return default


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r; using %s", name, raw, default)
        return default
    if value < minimum:
        logger.warning("%s=%d is below %d; using %s", name, value, minimum, default)
        return default
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSY


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_questions: int = DEFAULT_MAX_QUESTIONS
    llm_summary_enabled: bool = True
    summary_timeout_s: float = DEFAULT_SUMMARY_TIMEOUT
    session_file: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def use_llm_summary(self) -> bool:
        """The narrative needs both the switch and a key."""
        return self.llm_summary_enabled and bool(self.openai_api_key)

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Settings":
        # .env first, real environment variables win.
        if dotenv:
            load_dotenv()

        session_file = os.getenv("GARDEN_SESSION_FILE")
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            model=os.getenv("GARDEN_MODEL") or DEFAULT_MODEL,
            temperature=_env_float("GARDEN_TEMPERATURE", DEFAULT_TEMPERATURE),
            max_questions=_env_int("GARDEN_MAX_QUESTIONS", DEFAULT_MAX_QUESTIONS),
            llm_summary_enabled=_env_bool("GARDEN_LLM_SUMMARY", True),
            summary_timeout_s=_env_float("GARDEN_SUMMARY_TIMEOUT", DEFAULT_SUMMARY_TIMEOUT),
            session_file=Path(session_file) if session_file else None,
            log_level=(os.getenv("GARDEN_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )
