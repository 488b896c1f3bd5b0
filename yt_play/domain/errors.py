from dataclasses import dataclass


@dataclass(frozen=True)
class AppError:
    """Base class for application errors."""
    message: str


@dataclass(frozen=True)
class ConfigError(AppError):
    """Error related to the configuration file."""
    pass


@dataclass(frozen=True)
class InvalidUrl(AppError):
    """The playlist URL could not be parsed."""
    pass


@dataclass(frozen=True)
class MissingPlaylistParameter(AppError):
    """The URL has no 'list' query parameter."""
    pass


@dataclass(frozen=True)
class NoHomeDirectory(AppError):
    """The platform cache root could not be resolved."""
    pass


@dataclass(frozen=True)
class CacheDirCreationFailed(AppError):
    pass


@dataclass(frozen=True)
class FileSystemError(AppError):
    """Listing or deleting cached files failed."""
    pass


@dataclass(frozen=True)
class DownloaderError(AppError):
    """Error related to the downloader process."""
    pass


@dataclass(frozen=True)
class DownloaderInvocationFailed(DownloaderError):
    pass


@dataclass(frozen=True)
class DownloaderOutputNotUtf8(DownloaderError):
    pass


@dataclass(frozen=True)
class DownloaderOutputMalformed(DownloaderError):
    pass


@dataclass(frozen=True)
class PartialDownloadFailure(DownloaderError):
    """The batch download exited non-zero. Files already written are kept."""
    pass


@dataclass(frozen=True)
class PlayerInvocationFailed(AppError):
    pass
