import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from yt_play import __version__
from yt_play.adapters.mpv_adapter import MPVAdapter
from yt_play.adapters.ytdlp_adapter import YTDLPAdapter
from yt_play.config import Settings, load_settings
from yt_play.domain.errors import AppError
from yt_play.i18n import get_message, set_lang
from yt_play.logger_config import setup_logger
from yt_play.session import PlaylistSession, SessionOptions

# Initialization
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

# Create the Typer app object
app = typer.Typer(
    name="yt-play",
    help=get_message("app_help"),
    add_completion=False,
)


# --- Helper Functions ---


def _handle_error(error: AppError) -> None:
    """Displays a formatted error message and exits the application."""
    logger.debug(f"Aborting with {type(error).__name__}: {error.message}")
    err_console.print(f"[bold red]Error:[/bold red] {escape(error.message)}", soft_wrap=True)
    raise typer.Exit(code=1)


def _echo(message: str) -> None:
    # Filenames contain '[id]', which rich would read as markup.
    console.print(escape(message), soft_wrap=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"yt-play {__version__}")
        raise typer.Exit()


def _load_settings(config: Optional[Path]) -> Settings:
    return load_settings(config).either(_handle_error, lambda settings: settings)


# --- CLI Command ---


@app.command()
def play(
    url: str = typer.Argument(..., help=get_message("help_url")),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=get_message("help_verbose")),
    refresh: bool = typer.Option(False, "--refresh", "-r", help=get_message("help_refresh")),
    shuffle: bool = typer.Option(False, "--shuffle", "-s", help=get_message("help_shuffle")),
    yt_dlp_arguments: Optional[str] = typer.Option(
        None, "--yt-dlp-arguments", help=get_message("help_yt_dlp_arguments")
    ),
    mpv_arguments: Optional[str] = typer.Option(
        None, "--mpv-arguments", help=get_message("help_mpv_arguments")
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help=get_message("help_config"),
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
    lang: Optional[str] = typer.Option(
        None, "--lang", help=get_message("help_lang"), show_default=False
    ),
    version: Optional[bool] = typer.Option(
        None, "--version", help=get_message("help_version"), callback=_version_callback, is_eager=True
    ),
):
    """Plays a YouTube playlist, downloading its audio to a local cache first."""
    setup_logger(verbose)
    logger.info(f"Command 'play' initiated for URL: {url}")

    settings = _load_settings(config).override(
        yt_dlp_arguments=yt_dlp_arguments,
        mpv_arguments=mpv_arguments,
        lang=lang,
    )
    if settings.lang:
        set_lang(settings.lang)
        logger.info(f"Language set to: {settings.lang}")

    session = PlaylistSession(
        YTDLPAdapter(settings.downloader),
        MPVAdapter(settings.player),
        echo=_echo,
        cache_root=settings.cache_dir,
    )
    options = SessionOptions(
        refresh=refresh,
        shuffle=shuffle,
        verbose=verbose,
        yt_dlp_arguments=settings.yt_dlp_arguments,
        mpv_arguments=settings.mpv_arguments,
    )

    session.run(url, options).either(_handle_error, lambda _: None)


if __name__ == "__main__":
    app()
