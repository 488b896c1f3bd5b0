import logging
from urllib.parse import parse_qsl, urlsplit

from pymonad.either import Either, Left, Right

from .errors import AppError, InvalidUrl, MissingPlaylistParameter

logger = logging.getLogger(__name__)

PLAYLIST_PARAMETER = "list"

# Schemes whose URLs always carry a host.
SPECIAL_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def _is_path_segment(value: str) -> bool:
    """The id names a cache subdirectory, so it must stay a single plain segment."""
    return value not in (".", "..") and "/" not in value and "\\" not in value and "\x00" not in value


def extract_playlist_id(url: str) -> Either[AppError, str]:
    """
    Returns the decoded value of the first 'list' query parameter of a URL.

    Any host is accepted. An empty 'list' value counts as missing; a value
    that is not a single path segment ('..', 'a/b') is invalid.
    """
    try:
        parts = urlsplit(url.strip())
        # Accessing the port validates it.
        parts.port
    except ValueError as e:
        return Left(InvalidUrl(f"Invalid URL format: {e}"))

    if not parts.scheme:
        return Left(InvalidUrl("Invalid URL format: relative URL without a base"))
    if parts.scheme.lower() in SPECIAL_SCHEMES and not parts.netloc:
        return Left(InvalidUrl("Invalid URL format: empty host"))

    for name, value in parse_qsl(parts.query, keep_blank_values=True):
        if name == PLAYLIST_PARAMETER:
            if not value:
                break
            if not _is_path_segment(value):
                return Left(InvalidUrl(f"Invalid URL format: '{value}' is not a valid playlist id"))
            logger.debug(f"Playlist id '{value}' extracted from '{url}'.")
            return Right(value)

    return Left(MissingPlaylistParameter("Could not find a 'list' parameter in the URL"))
