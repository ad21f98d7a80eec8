from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

BASE_URL_ENV = "LLM_OUTPUT_FORMAT_BASE_URL"
LOG_LEVEL_ENV = "LLM_OUTPUT_FORMAT_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class Settings:
    """Settings for the web UI. The field/schema core reads no configuration."""

    base_url: Optional[str] = None
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    base_url = (env.get(BASE_URL_ENV) or "").strip() or None
    log_level = (env.get(LOG_LEVEL_ENV) or "INFO").strip().upper() or "INFO"
    return Settings(base_url=base_url, log_level=log_level)


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
