"""
Configuration loading utilities.

Loads environment variables from `.env` and ensures the data directory
exists. Values are validated up front so a bad unit system fails here and not
half way through a report.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from streamlit.logger import get_logger

from utils.units import UnitSystem

logger = get_logger(__name__)


@dataclass(frozen=True)
class Config:
    data_dir: Path
    unit_system: Optional[UnitSystem]
    locale: str


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def load_config() -> Config:
    """Load configuration from environment and provision directories."""
    load_dotenv(find_dotenv(usecwd=True), override=False)

    data_dir_str = os.getenv("DATA_DIR", "./data")
    data_dir = Path(data_dir_str).expanduser().resolve()

    # Unset means "use the persisted runtime setting".
    raw_units = os.getenv("UNIT_SYSTEM")
    unit_system = UnitSystem.parse(raw_units) if raw_units else None
    locale = os.getenv("LOCALE", "en_US")
    logger.debug("DATA_DIR: %s, UNIT_SYSTEM: %s, LOCALE: %s", data_dir, raw_units, locale)

    _ensure_dir(data_dir)

    return Config(data_dir=data_dir, unit_system=unit_system, locale=locale)
