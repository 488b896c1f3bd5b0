import json
import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Sequence

from pymonad.either import Either, Left, Right

from yt_play.domain.errors import (
    AppError,
    DownloaderInvocationFailed,
    DownloaderOutputMalformed,
    DownloaderOutputNotUtf8,
    PartialDownloadFailure,
)
from yt_play.domain.models import Playlist, PlaylistEntry
from yt_play.domain.ports import PlaylistFetcher

logger = logging.getLogger(__name__)

PLAYLIST_URL = "https://www.youtube.com/playlist?list={playlist_id}"
WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
OUTPUT_TEMPLATE = "%(title)s [%(id)s].%(ext)s"


class YTDLPAdapter(PlaylistFetcher):
    """Runs the yt-dlp executable to list playlists and download audio."""

    def __init__(self, executable: str = "yt-dlp"):
        self._executable = executable

    def _query_command(self, playlist_id: str) -> List[str]:
        return [
            self._executable,
            "--flat-playlist",
            "-J",
            PLAYLIST_URL.format(playlist_id=playlist_id),
        ]

    def _batch_command(self, extra_arguments: str) -> List[str]:
        # Extra arguments are split on whitespace only, quotes are not honoured.
        return [
            self._executable,
            "--batch-file",
            "-",
            "-o",
            OUTPUT_TEMPLATE,
            "-x",
            *extra_arguments.split(),
        ]

    def fetch_playlist(self, playlist_id: str) -> Either[AppError, Playlist]:
        """
        Lists the entries of a playlist with 'yt-dlp --flat-playlist -J'.
        The downloader's stderr is forwarded to ours in every case.
        """
        command = self._query_command(playlist_id)
        logger.debug(f"Running: {command}")

        try:
            result = subprocess.run(command, capture_output=True)
        except OSError as e:
            logger.debug(f"Could not start '{self._executable}': {e}")
            return Left(DownloaderInvocationFailed(f"Could not run '{self._executable}': {e}"))

        if result.stderr:
            sys.stderr.write(result.stderr.decode("utf-8", errors="replace"))
            sys.stderr.flush()
        logger.debug(f"'{self._executable}' exited with code {result.returncode}")

        try:
            stdout = result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.debug(f"Downloader output is not UTF-8: {e}")
            return Left(DownloaderOutputNotUtf8(f"Downloader output is not valid UTF-8: {e}"))

        try:
            playlist = Playlist.from_dict(json.loads(stdout))
        except ValueError as e:
            logger.debug(f"Could not parse playlist '{playlist_id}': {e}")
            return Left(DownloaderOutputMalformed(f"Could not parse playlist data: {e}"))

        logger.info(f"Playlist '{playlist.title}' has {len(playlist.entries)} entries.")
        return Right(playlist)

    def download_entries(
        self, entries: Sequence[PlaylistEntry], destination: Path, extra_arguments: str = ""
    ) -> Either[AppError, int]:
        """
        Downloads the audio of the entries in one batch, with the destination
        as working directory. Files written before a failure are kept.
        """
        command = self._batch_command(extra_arguments)
        batch = "".join(WATCH_URL.format(video_id=entry.id) + "\n" for entry in entries)
        logger.debug(f"Running in '{destination}': {command}")

        try:
            process = subprocess.Popen(command, cwd=destination, stdin=subprocess.PIPE)
        except OSError as e:
            logger.debug(f"Could not start '{self._executable}': {e}")
            return Left(DownloaderInvocationFailed(f"Could not run '{self._executable}': {e}"))

        process.communicate(input=batch.encode("utf-8"))

        if process.returncode != 0:
            logger.debug(f"Batch download failed with exit code {process.returncode}")
            return Left(PartialDownloadFailure("yt-dlp failed to download some files"))

        logger.info(f"Downloaded {len(entries)} entries into '{destination}'.")
        return Right(len(entries))
