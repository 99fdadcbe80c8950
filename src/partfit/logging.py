"""Logging configuration for partfit."""

import logging
from pathlib import Path

import platformdirs


def setup_logging() -> None:
    """Configure logging with file handler for debug output.

    Logs go to the platform user config dir (e.g. ~/.config/partfit/debug.log).
    Console output is handled separately by Rich; this is for debug file logging only.
    """
    logger = logging.getLogger("partfit")
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers on repeated calls
    if logger.handlers:
        return

    log_file = Path(platformdirs.user_config_dir("partfit")) / "debug.log"
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        # Unwritable log dir: keep the CLI working without a file
        logger.addHandler(logging.NullHandler())
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(fh)

    logger.debug("Logging initialized → %s", log_file)
