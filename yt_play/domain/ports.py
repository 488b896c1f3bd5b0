from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from pymonad.either import Either

from .errors import AppError
from .models import Playlist, PlaylistEntry


class PlaylistFetcher(ABC):
    """
    Port defining the contract for the service that lists playlists and
    downloads their entries.
    """

    @abstractmethod
    def fetch_playlist(self, playlist_id: str) -> Either[AppError, Playlist]:
        """
        Retrieves the current, ordered entries of a playlist.

        Returns:
            Either: A Right(Playlist) or a Left(AppError).
        """
        pass

    @abstractmethod
    def download_entries(
        self, entries: Sequence[PlaylistEntry], destination: Path, extra_arguments: str = ""
    ) -> Either[AppError, int]:
        """
        Downloads the audio of every entry into the destination directory, in
        one batch, naming files '<title> [<id>].<ext>'.

        Returns:
            Either: A Right(number of entries requested) or a Left(AppError).
        """
        pass


class MediaPlayer(ABC):
    """
    Port defining the contract for the player of a cache directory.
    """

    @abstractmethod
    def play(
        self, directory: Path, shuffle: bool = False, extra_arguments: str = ""
    ) -> Either[AppError, int]:
        """
        Plays every file of the directory and blocks until the player exits.

        Returns:
            Either: A Right(exit status), whatever its value, or a Left(AppError)
            if the player could not be started.
        """
        pass
