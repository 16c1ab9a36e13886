"""Service settings, read from ``ESTIMATOR_*`` environment variables or a local ``.env``."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.project import STORAGE_KEY


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ESTIMATOR_", env_file=".env", extra="ignore")

    storage_path: Optional[Path] = Field(default=None, description="JSON file holding the saved project; unset keeps it in memory")
    storage_key: str = STORAGE_KEY
    export_dir: Path = Path("exports")
    currency_symbol: str = "$"
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("estimator_app").setLevel(level.upper())
