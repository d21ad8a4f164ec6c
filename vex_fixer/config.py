# vex_fixer/config.py
import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from platformdirs import user_config_path

from .errors import ConfigError

logger = logging.getLogger(__name__)

# --- Define App Name and Author for platformdirs ---
APP_NAME = "vexfix"
APP_AUTHOR = "vexfix"

CONFIG_FILENAME = "vexfix.yaml"

DEFAULT_CONFIG = {
    "input_file": "vex.json",               # single-file prompt default
    "output_file": "vex-modificado.json",   # single-file prompt default
    "target_filename": "vex.json",          # what --folder looks for
    "output_filename": "vex-modificado.json",
    "indent": 2,
    "color": True,
    "log_level": "WARNING",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_config_paths() -> list[Path]:
    """Config file lookup order: current directory, then the per-user config dir."""
    return [Path(CONFIG_FILENAME), user_config_path(appname=APP_NAME, appauthor=APP_AUTHOR) / CONFIG_FILENAME]


def _validate(config: dict, source: str) -> dict:
    unknown = sorted(set(config) - set(DEFAULT_CONFIG))
    if unknown:
        raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}", source)

    for key in ("input_file", "output_file", "target_filename", "output_filename"):
        if key in config and (not isinstance(config[key], str) or not config[key].strip()):
            raise ConfigError(f"'{key}' must be a non-empty string", source)
    for key in ("target_filename", "output_filename"):
        if key in config and ("/" in config[key] or "\\" in config[key]):
            raise ConfigError(f"'{key}' must be a bare file name, not a path", source)

    if "indent" in config:
        indent = config["indent"]
        if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
            raise ConfigError("'indent' must be a non-negative integer", source)
    if "color" in config and not isinstance(config["color"], bool):
        raise ConfigError("'color' must be true or false", source)
    if "log_level" in config:
        level = config["log_level"]
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigError(f"'log_level' must be one of {', '.join(LOG_LEVELS)}", source)
        config["log_level"] = level.upper()
    return config


def load_config(config_path: Optional[Union[str, Path]] = None) -> dict:
    """
    Loads the YAML configuration merged over DEFAULT_CONFIG.

    An explicit config_path must exist. Without one, the default locations are
    tried and a missing file simply means defaults.
    """
    config = dict(DEFAULT_CONFIG)

    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError("configuration file not found", str(path))
    else:
        path = next((p for p in default_config_paths() if p.is_file()), None)
        if path is None:
            logger.debug("No configuration file found. Using defaults.")
            return config

    logger.info(f"Loading configuration from '{path.resolve()}'")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            loaded_yaml = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"could not parse YAML: {e}", str(path)) from e
    except OSError as e:
        raise ConfigError(f"could not read configuration: {e}", str(path)) from e

    if loaded_yaml is None:  # empty file
        return config
    if not isinstance(loaded_yaml, dict):
        raise ConfigError("configuration must be a mapping", str(path))

    config.update(_validate(dict(loaded_yaml), str(path)))
    return config
