"""
Runtime options persisted as JSON next to the activity data.

Notes:
- Options saved in the file are merged over the defaults on load.
- Reads and writes hold a portalocker lock like the CSV storage.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import portalocker
from streamlit.logger import get_logger

from utils.units import UnitSystem

logger = get_logger(__name__)

CONFIG_FILE = "config.json"
DEFAULT_OPTIONS: Dict[str, Any] = {
    "unit_system": UnitSystem.METRIC.value,
    "import_dir": None,
}


class RuntimeConfig:
    def __init__(self, directory: str | Path):
        self._options: Dict[str, Any] = dict(DEFAULT_OPTIONS)
        self.config_file = Path(directory) / CONFIG_FILE
        if self.config_file.exists():
            self._load_options()

    def get_option(self, name: str) -> Any:
        return self._options.get(name)

    def set_option(self, name: str, value: Any) -> None:
        if isinstance(value, UnitSystem):
            value = value.value
        self._options[name] = value
        self._save_options()

    def unit_system(self) -> UnitSystem:
        return UnitSystem.parse(self._options.get("unit_system"))

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self._options)

    def _load_options(self) -> None:
        try:
            with portalocker.Lock(str(self.config_file), mode="r", timeout=10, flags=portalocker.LOCK_SH) as handle:
                loaded = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Cannot load config file '%s': %s", self.config_file, exc)
            return
        if not isinstance(loaded, dict):
            logger.error("Cannot load config file '%s': not a JSON object", self.config_file)
            return
        self._options.update(loaded)

    def _save_options(self) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        data = json.dumps(self._options, indent=2, sort_keys=True)
        try:
            with portalocker.Lock(str(self.config_file), mode="w", timeout=10, flags=portalocker.LOCK_EX) as handle:
                handle.write(data + "\n")
        except OSError as exc:
            logger.error("Cannot write config file '%s': %s", self.config_file, exc)
            raise
        logger.info("Runtime config file '%s' written", self.config_file)
