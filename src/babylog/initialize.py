# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from babylog import configuration
from babylog.log import configure_logging
from babylog.repository.configuration import CONFIGURATION_REPO


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()

    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))


def __ensure_data_files() -> None:
    # One file per record inside each directory
    if not configuration.DATA_FEEDINGS_DIR.is_dir():
        configuration.DATA_FEEDINGS_DIR.mkdir(parents=True, exist_ok=True)
        (configuration.DATA_FEEDINGS_DIR / ".gitkeep").touch()
    if not configuration.DATA_SLEEP_DIR.is_dir():
        configuration.DATA_SLEEP_DIR.mkdir(parents=True, exist_ok=True)
        (configuration.DATA_SLEEP_DIR / ".gitkeep").touch()
