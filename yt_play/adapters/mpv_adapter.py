import logging
import subprocess
from pathlib import Path
from typing import List

from pymonad.either import Either, Left, Right

from yt_play.domain.errors import AppError, PlayerInvocationFailed
from yt_play.domain.ports import MediaPlayer

logger = logging.getLogger(__name__)


class MPVAdapter(MediaPlayer):
    """Plays a cache directory with mpv, audio only."""

    def __init__(self, executable: str = "mpv"):
        self._executable = executable

    def _command(self, shuffle: bool, extra_arguments: str) -> List[str]:
        command = [self._executable, "--no-video"]
        if shuffle:
            command.append("--shuffle")
        command.extend(extra_arguments.split())
        command.append(".")
        return command

    def play(self, directory: Path, shuffle: bool = False, extra_arguments: str = "") -> Either[AppError, int]:
        command = self._command(shuffle, extra_arguments)
        logger.debug(f"Running in '{directory}': {command}")

        try:
            result = subprocess.run(command, cwd=directory)
        except OSError as e:
            logger.debug(f"Could not start '{self._executable}': {e}")
            return Left(PlayerInvocationFailed(f"Could not run '{self._executable}': {e}"))

        # Quitting the player early is not an error.
        logger.debug(f"'{self._executable}' exited with code {result.returncode}")
        return Right(result.returncode)
