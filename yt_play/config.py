import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml
from pymonad.either import Either, Left, Right

from yt_play.domain.errors import AppError, ConfigError
from yt_play.locations import config_root

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yml"


@dataclass(frozen=True)
class Settings:
    """Values read from the configuration file, before CLI overrides."""
    downloader: str = "yt-dlp"
    player: str = "mpv"
    yt_dlp_arguments: str = ""
    mpv_arguments: str = ""
    cache_dir: Optional[Path] = None
    lang: Optional[str] = None

    def override(self, **values) -> "Settings":
        """Returns a copy where every value that is not None replaces the current one."""
        return replace(self, **{key: value for key, value in values.items() if value is not None})


def default_config_path() -> Optional[Path]:
    return config_root().either(lambda _: None, lambda root: root / CONFIG_FILENAME)


def parse_settings(data) -> Either[AppError, Settings]:
    """Builds Settings from the mapping found in the YAML file."""
    if data is None:
        return Right(Settings())
    if not isinstance(data, dict):
        return Left(ConfigError("The configuration file must contain a mapping."))

    known = {f.name for f in fields(Settings)}
    values = {}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown configuration key '{key}'.")
            continue
        if value is None:
            continue
        if not isinstance(value, str):
            return Left(ConfigError(f"Configuration key '{key}' must be a string."))
        values[key] = Path(value).expanduser() if key == "cache_dir" else value
    return Right(Settings(**values))


def load_settings(path: Optional[Path] = None) -> Either[AppError, Settings]:
    """
    Loads the configuration file.

    Without an explicit path, the platform config directory is used and a
    missing file simply yields the defaults.
    """
    explicit = path is not None
    path = path if explicit else default_config_path()

    if path is None or (not explicit and not path.exists()):
        logger.debug("No configuration file found, using defaults.")
        return Right(Settings())

    try:
        with open(path, "r", encoding="utf-8") as file:
            data = yaml.safe_load(file)
    except (yaml.YAMLError, OSError) as e:
        logger.debug(f"Could not read configuration file '{path}': {e}", exc_info=True)
        return Left(ConfigError(f"Could not read configuration file '{path}': {e}"))

    logger.info(f"Configuration loaded from '{path}'.")
    return parse_settings(data)
