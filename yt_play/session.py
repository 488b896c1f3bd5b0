"""
One pass of the player: resolve the playlist id, bring its cache directory
up to date when needed, then play it.

A missing cache directory is created and filled. An existing one is trusted
as is unless a refresh is requested.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple

from pymonad.either import Either, Left, Right
from toolz import pipe

from yt_play.domain.errors import AppError, CacheDirCreationFailed
from yt_play.domain.identifier import extract_playlist_id
from yt_play.domain.models import Playlist, ReconcileReport
from yt_play.domain.ports import MediaPlayer, PlaylistFetcher
from yt_play.domain.reconcile import reconcile
from yt_play.i18n import get_message
from yt_play.locations import playlist_cache_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOptions:
    refresh: bool = False
    shuffle: bool = False
    verbose: bool = False
    yt_dlp_arguments: str = ""
    mpv_arguments: str = ""


class PlaylistSession:
    def __init__(
        self,
        fetcher: PlaylistFetcher,
        player: MediaPlayer,
        echo: Callable[[str], None] = logger.info,
        cache_root: Optional[Path] = None,
    ):
        self._fetcher = fetcher
        self._player = player
        self._echo = echo
        self._cache_root = cache_root

    def _verbose(self, options: SessionOptions, key: str, **kwargs) -> None:
        if options.verbose:
            self._echo(get_message(key, **kwargs))

    def _locate(self, playlist_id: str, options: SessionOptions) -> Either[AppError, Tuple[str, Path]]:
        self._verbose(options, "found_playlist_id", playlist_id=playlist_id)

        def found(directory: Path) -> Tuple[str, Path]:
            self._verbose(options, "using_cache_dir", path=directory)
            return playlist_id, directory

        return playlist_cache_dir(playlist_id, self._cache_root).map(found)

    def _prepare(self, playlist_id: str, directory: Path, options: SessionOptions) -> Either[AppError, Path]:
        """Creates and fills a new cache directory, or refreshes an existing one on request."""
        if directory.exists():
            if not options.refresh:
                logger.info(f"Using cached playlist '{playlist_id}' without refresh.")
                return Right(directory)
            return self.update(playlist_id, directory, options).map(lambda _: directory)

        self._verbose(options, "creating_cache_dir", path=directory)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug(f"Failed to create cache directory '{directory}': {e}")
            return Left(CacheDirCreationFailed(f"Failed to create cache directory at {directory}: {e}"))
        return self.update(playlist_id, directory, options).map(lambda _: directory)

    def _report_playlist(self, playlist: Playlist, options: SessionOptions) -> Playlist:
        self._verbose(options, "fetched_playlist", title=playlist.title, count=len(playlist.entries))
        for entry in playlist.entries:
            self._verbose(options, "playlist_entry", title=entry.title, entry_id=entry.id)
        return playlist

    def update(self, playlist_id: str, directory: Path, options: SessionOptions) -> Either[AppError, ReconcileReport]:
        """Fetches the playlist and reconciles the cache directory with it."""
        self._verbose(options, "fetching_playlist", playlist_id=playlist_id)

        def reconcile_with(playlist: Playlist) -> Either[AppError, ReconcileReport]:
            return reconcile(
                playlist.entries,
                directory,
                self._fetcher,
                options.yt_dlp_arguments,
                on_delete=lambda path: self._echo(get_message("deleting_file", path=path)),
                on_download=lambda missing: self._echo(get_message("downloading_missing", count=len(missing))),
            )

        def report(result: ReconcileReport) -> ReconcileReport:
            if result.up_to_date:
                self._verbose(options, "cache_up_to_date")
            return result

        return pipe(
            self._fetcher.fetch_playlist(playlist_id),
            lambda e: e.map(lambda playlist: self._report_playlist(playlist, options)),
            lambda e: e.bind(reconcile_with),
            lambda e: e.map(report),
        )

    def _play(self, directory: Path, options: SessionOptions) -> Either[AppError, Path]:
        self._verbose(options, "playing", path=directory)
        return self._player.play(directory, options.shuffle, options.mpv_arguments).map(lambda _: directory)

    def run(self, url: str, options: SessionOptions = SessionOptions()) -> Either[AppError, Path]:
        """
        Plays the playlist behind a URL.

        Returns:
            Either: A Right(cache directory) once the player exits, or a
            Left(AppError) for the first failing step.
        """
        logger.info(f"Session started for URL: {url}")
        return pipe(
            extract_playlist_id(url),
            lambda e: e.bind(lambda playlist_id: self._locate(playlist_id, options)),
            lambda e: e.bind(lambda located: self._prepare(located[0], located[1], options)),
            lambda e: e.bind(lambda directory: self._play(directory, options)),
        )
