"""
Purpose:
    - Loads a TOML config file
    - Builds the BusConfig from its [bus] table (validated by pydantic)
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

from magicbus.config.configs import BusConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Config-loader; loading toml file.
    """

    def __init__(self, base_dir: str = ".") -> None:
        self._base_dir = base_dir

    def load(self, file_name: str) -> dict[str, Any]:
        path = Path(file_name)
        if not path.is_absolute():
            path = Path(self._base_dir) / file_name

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open("rb") as f:
            return tomllib.load(f)

    def load_bus_config(self, file_name: str) -> BusConfig:
        data = self.load(file_name)
        bus_data = data.get("bus", {})
        if not isinstance(bus_data, dict):
            raise ValueError(
                f"[bus] must be a table in {file_name}, got {type(bus_data).__name__}"
            )
        # unset keys fall back to the model defaults
        cfg = BusConfig(**bus_data)
        logger.debug(f"Loaded bus config {cfg.name!r} from {file_name}")
        return cfg
