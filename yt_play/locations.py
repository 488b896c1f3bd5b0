"""
Platform-standard directories for the application, following the same
conventions as the 'directories' project layout: XDG on Linux,
~/Library on macOS, the Known Folders on Windows.
"""
import logging
import os
import platform
from pathlib import Path
from typing import Mapping, Optional

from pymonad.either import Either, Left, Right

from yt_play.domain.errors import AppError, NoHomeDirectory

logger = logging.getLogger(__name__)

QUALIFIER = "dev"
ORGANIZATION = "hawksley"
APPLICATION = "yt-play"


def _home(environ: Mapping[str, str]) -> Path:
    """Raises RuntimeError when no home directory can be resolved."""
    home = environ.get("HOME") or environ.get("USERPROFILE")
    if home:
        return Path(home)
    try:
        return Path.home()
    except KeyError as e:
        raise RuntimeError(str(e)) from e


def _xdg_dir(environ: Mapping[str, str], variable: str, fallback: str) -> Path:
    value = environ.get(variable, "")
    if value and os.path.isabs(value):
        return Path(value)
    return _home(environ) / fallback


def _project_dir(kind: str, system: Optional[str], environ: Optional[Mapping[str, str]]) -> Path:
    system = (system or platform.system()).lower()
    environ = os.environ if environ is None else environ

    if system == "windows":
        variable = "LOCALAPPDATA" if kind == "cache" else "APPDATA"
        fallback = "Local" if kind == "cache" else "Roaming"
        base = Path(environ[variable]) if environ.get(variable) else _home(environ) / "AppData" / fallback
        return base / ORGANIZATION / APPLICATION / kind
    if system == "darwin":
        folder = "Caches" if kind == "cache" else "Application Support"
        return _home(environ) / "Library" / folder / f"{QUALIFIER}.{ORGANIZATION}.{APPLICATION}"
    if kind == "cache":
        return _xdg_dir(environ, "XDG_CACHE_HOME", ".cache") / APPLICATION
    return _xdg_dir(environ, "XDG_CONFIG_HOME", ".config") / APPLICATION


def cache_root(system: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Either[AppError, Path]:
    """The application cache directory of the current platform."""
    try:
        return Right(_project_dir("cache", system, environ))
    except RuntimeError as e:
        logger.debug(f"Could not resolve the cache root: {e}")
        return Left(NoHomeDirectory("Home directory could not be found"))


def config_root(system: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Either[AppError, Path]:
    """The application configuration directory of the current platform."""
    try:
        return Right(_project_dir("config", system, environ))
    except RuntimeError as e:
        logger.debug(f"Could not resolve the config root: {e}")
        return Left(NoHomeDirectory("Home directory could not be found"))


def playlist_cache_dir(
    playlist_id: str,
    root: Optional[Path] = None,
    system: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Either[AppError, Path]:
    """
    Computes '<cache root>/<playlist id>' without touching the filesystem.
    An explicit root replaces the platform cache root.
    """
    base = Right(root) if root is not None else cache_root(system, environ)
    return base.map(lambda path: path / playlist_id)
