"""
Cache reconciliation.

A cache directory holds one file per playlist entry, named
'<title> [<id>].<ext>'. Reconciling it against the current entries deletes
every file whose name embeds no current id and downloads the entries no file
embeds, in a single downloader batch.
"""
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from pymonad.either import Either, Left, Right

from .errors import AppError, FileSystemError
from .models import PlaylistEntry, ReconcileReport
from .ports import PlaylistFetcher

logger = logging.getLogger(__name__)


def list_cached_files(directory: Path) -> Either[AppError, List[Path]]:
    """Lists the regular files directly inside the directory, sorted by name."""
    try:
        files = [path for path in directory.iterdir() if path.is_file()]
    except OSError as e:
        logger.debug(f"Could not list '{directory}': {e}")
        return Left(FileSystemError(f"Could not list cache directory '{directory}': {e}"))
    return Right(sorted(files, key=lambda path: path.name))


def matching_id(filename: str, valid_ids: Sequence[str]) -> Optional[str]:
    """Returns the first id embedded in the filename, if any."""
    return next((entry_id for entry_id in valid_ids if entry_id in filename), None)


def missing_entries(entries: Sequence[PlaylistEntry], found_ids: set) -> List[PlaylistEntry]:
    """Entries with no cached file, in playlist order."""
    return [entry for entry in entries if entry.id not in found_ids]


def _scan(
    files: List[Path],
    entries: Sequence[PlaylistEntry],
    on_delete: Callable[[Path], None],
) -> Either[AppError, ReconcileReport]:
    # Longest ids first, so a file embedding "abcdef" is not claimed by "abc".
    valid_ids = sorted({entry.id for entry in entries}, key=lambda entry_id: (-len(entry_id), entry_id))
    found_ids = set()
    deleted, kept = [], []

    for path in files:
        entry_id = matching_id(path.name, valid_ids)
        if entry_id is not None:
            found_ids.add(entry_id)
            kept.append(path)
            continue

        on_delete(path)
        try:
            path.unlink()
        except OSError as e:
            logger.debug(f"Failed to delete '{path}': {e}")
            return Left(FileSystemError(f"Failed to delete '{path}': {e}"))
        logger.info(f"Deleted erroneous file '{path.name}'.")
        deleted.append(path)

    return Right(
        ReconcileReport(
            deleted=tuple(deleted),
            kept=tuple(kept),
            missing=tuple(missing_entries(entries, found_ids)),
        )
    )


def reconcile(
    entries: Sequence[PlaylistEntry],
    directory: Path,
    fetcher: PlaylistFetcher,
    extra_arguments: str = "",
    on_delete: Optional[Callable[[Path], None]] = None,
    on_download: Optional[Callable[[Sequence[PlaylistEntry]], None]] = None,
) -> Either[AppError, ReconcileReport]:
    """
    Aligns the files of an existing cache directory with the playlist entries.

    Args:
        entries: The desired entries, in playlist order.
        directory: The cache directory. It must exist.
        fetcher: Downloads the missing entries.
        extra_arguments: Appended to the downloader's command line.
        on_delete: Called with each erroneous file right before it is deleted.
        on_download: Called with the missing entries right before the batch starts.

    Returns:
        Either: A Right(ReconcileReport) or a Left(AppError). A failed deletion
        stops the pass; a failed batch leaves the files it wrote.
    """
    on_delete = on_delete or (lambda path: None)
    on_download = on_download or (lambda missing: None)

    def download_missing(report: ReconcileReport) -> Either[AppError, ReconcileReport]:
        if not report.missing:
            logger.info(f"Cache '{directory}' is up to date.")
            return Right(report)
        on_download(report.missing)
        logger.info(f"Downloading {len(report.missing)} missing entries into '{directory}'.")
        return fetcher.download_entries(report.missing, directory, extra_arguments).map(
            lambda _: report
        )

    return (
        list_cached_files(directory)
        .bind(lambda files: _scan(files, entries, on_delete))
        .bind(download_missing)
    )
