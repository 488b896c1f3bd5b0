import json
import logging
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from yt_play.adapters.ytdlp_adapter import YTDLPAdapter
from yt_play.domain.errors import (
    DownloaderInvocationFailed,
    DownloaderOutputMalformed,
    DownloaderOutputNotUtf8,
    PartialDownloadFailure,
)
from yt_play.domain.models import Playlist, PlaylistEntry

PLAYLIST_JSON = json.dumps(
    {
        "title": "Test Playlist",
        "entries": [{"id": "a1", "title": "Song One"}, {"id": "b2", "title": "Chanson Deux é"}],
    }
).encode("utf-8")


@pytest.fixture
def ytdlp_adapter():
    """Fixture to provide a YTDLPAdapter instance."""
    return YTDLPAdapter()


def _completed(stdout=b"", stderr=b"", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


# Tests for fetch_playlist


@patch("yt_play.adapters.ytdlp_adapter.subprocess.run")
def test_fetch_playlist_success(mock_run, ytdlp_adapter, caplog):
    """
    Given a playlist id,
    When fetch_playlist is called,
    Then it should run yt-dlp in flat JSON mode and return the parsed playlist.
    """
    mock_run.return_value = _completed(stdout=PLAYLIST_JSON)

    result = ytdlp_adapter.fetch_playlist("PL123")

    assert result.is_right()
    assert result.value == Playlist(
        title="Test Playlist",
        entries=(PlaylistEntry("a1", "Song One"), PlaylistEntry("b2", "Chanson Deux é")),
    )
    mock_run.assert_called_once_with(
        ["yt-dlp", "--flat-playlist", "-J", "https://www.youtube.com/playlist?list=PL123"],
        capture_output=True,
    )


@patch("yt_play.adapters.ytdlp_adapter.subprocess.run")
def test_fetch_playlist_uses_configured_executable(mock_run):
    mock_run.return_value = _completed(stdout=PLAYLIST_JSON)

    YTDLPAdapter("/opt/bin/yt-dlp").fetch_playlist("PL123")

    command = mock_run.call_args[0][0]
    assert command[0] == "/opt/bin/yt-dlp"


@patch("yt_play.adapters.ytdlp_adapter.subprocess.run")
def test_fetch_playlist_forwards_stderr(mock_run, ytdlp_adapter, capsys):
    mock_run.return_value = _completed(stdout=PLAYLIST_JSON, stderr=b"WARNING: some videos are unavailable\n")

    result = ytdlp_adapter.fetch_playlist("PL123")

    assert result.is_right()
    assert "some videos are unavailable" in capsys.readouterr().err


@patch("yt_play.adapters.ytdlp_adapter.subprocess.run")
def test_fetch_playlist_forwards_stderr_on_failure(mock_run, ytdlp_adapter, capsys):
    mock_run.return_value = _completed(stdout=b"", stderr=b"ERROR: playlist does not exist\n", returncode=1)

    result = ytdlp_adapter.fetch_playlist("PL404")

    assert result.is_left()
    assert "playlist does not exist" in capsys.readouterr().err


@patch("yt_play.adapters.ytdlp_adapter.subprocess.run", side_effect=FileNotFoundError("No such file: 'yt-dlp'"))
def test_fetch_playlist_invocation_failure(mock_run, ytdlp_adapter, caplog):
    caplog.set_level(logging.DEBUG)
    result = ytdlp_adapter.fetch_playlist("PL123")

    assert result.is_left()
    error_value, _ = result.monoid
    assert isinstance(error_value, DownloaderInvocationFailed)
    assert "Could not start 'yt-dlp'" in caplog.text


@patch("yt_play.adapters.ytdlp_adapter.subprocess.run")
def test_fetch_playlist_output_not_utf8(mock_run, ytdlp_adapter):
    mock_run.return_value = _completed(stdout=b'{"title": "\xff\xfe"}')

    result = ytdlp_adapter.fetch_playlist("PL123")

    error_value, _ = result.monoid
    assert isinstance(error_value, DownloaderOutputNotUtf8)


@pytest.mark.parametrize(
    "stdout",
    [b"", b"not json", b'{"title": "x"}', b'{"title": "x", "entries": [{"id": 1, "title": "y"}]}'],
)
@patch("yt_play.adapters.ytdlp_adapter.subprocess.run")
def test_fetch_playlist_output_malformed(mock_run, stdout, ytdlp_adapter):
    mock_run.return_value = _completed(stdout=stdout)

    result = ytdlp_adapter.fetch_playlist("PL123")

    error_value, _ = result.monoid
    assert isinstance(error_value, DownloaderOutputMalformed)
    assert "Could not parse playlist data" in error_value.message


# Tests for download_entries


@patch("yt_play.adapters.ytdlp_adapter.subprocess.Popen")
def test_download_entries_feeds_urls_to_batch_mode(mock_popen, ytdlp_adapter, caplog):
    """
    Given missing entries,
    When download_entries is called,
    Then yt-dlp should run in batch mode in the cache directory
    And receive one watch URL per entry on stdin.
    """
    process = MagicMock(returncode=0)
    mock_popen.return_value = process
    destination = Path("/cache/PL123")
    entries = [PlaylistEntry("a1", "Song One"), PlaylistEntry("b2", "Song Two")]

    result = ytdlp_adapter.download_entries(entries, destination)

    assert result.is_right()
    assert result.value == 2
    mock_popen.assert_called_once_with(
        ["yt-dlp", "--batch-file", "-", "-o", "%(title)s [%(id)s].%(ext)s", "-x"],
        cwd=destination,
        stdin=subprocess.PIPE,
    )
    process.communicate.assert_called_once_with(
        input=b"https://www.youtube.com/watch?v=a1\nhttps://www.youtube.com/watch?v=b2\n"
    )


@patch("yt_play.adapters.ytdlp_adapter.subprocess.Popen")
def test_download_entries_appends_whitespace_split_arguments(mock_popen, ytdlp_adapter):
    mock_popen.return_value = MagicMock(returncode=0)

    ytdlp_adapter.download_entries(
        [PlaylistEntry("a1", "x")], Path("/cache"), '  --audio-format mp3\t--embed-metadata "a b" '
    )

    command = mock_popen.call_args[0][0]
    assert command[6:] == ["--audio-format", "mp3", "--embed-metadata", '"a', 'b"']


@patch("yt_play.adapters.ytdlp_adapter.subprocess.Popen")
def test_download_entries_non_zero_exit(mock_popen, ytdlp_adapter, caplog):
    caplog.set_level(logging.DEBUG)
    mock_popen.return_value = MagicMock(returncode=1)

    result = ytdlp_adapter.download_entries([PlaylistEntry("a1", "x")], Path("/cache"))

    assert result.is_left()
    error_value, _ = result.monoid
    assert isinstance(error_value, PartialDownloadFailure)
    assert error_value.message == "yt-dlp failed to download some files"
    assert "Batch download failed with exit code 1" in caplog.text
    assert all(record.levelno < logging.WARNING for record in caplog.records)


@patch("yt_play.adapters.ytdlp_adapter.subprocess.Popen", side_effect=PermissionError("not executable"))
def test_download_entries_invocation_failure(mock_popen, ytdlp_adapter):
    result = ytdlp_adapter.download_entries([PlaylistEntry("a1", "x")], Path("/cache"))

    error_value, _ = result.monoid
    assert isinstance(error_value, DownloaderInvocationFailed)
    assert "not executable" in error_value.message
