import logging
import sys


def setup_logger(verbose: bool = False):
    """Configures the root logger for the application."""
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Logs go to stderr so they never mix with the player's output.
    handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)

    # Add the handler only once
    if not logger.handlers:
        logger.addHandler(handler)
