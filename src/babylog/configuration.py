# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "babylog"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_FEEDINGS_DIR: Path = DATA_PATH / "feedings"
DATA_SLEEP_DIR: Path = DATA_PATH / "sleep"


class Configuration(TypedDict):
    data_path: Optional[str]
    feeding_settle_delay_ms: int
    sleep_settle_delay_ms: int
    highlight_window_ms: int
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "feeding_settle_delay_ms": 0,
        "sleep_settle_delay_ms": 500,
        "highlight_window_ms": 1000,
        "log_level": "WARNING",
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_FEEDINGS_DIR, DATA_SLEEP_DIR

    DATA_PATH = data_path
    DATA_FEEDINGS_DIR = DATA_PATH / "feedings"
    DATA_SLEEP_DIR = DATA_PATH / "sleep"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are used.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
