import logging
import logging.handlers
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from colorama import Fore, Style

try:
    __version__ = version("skos2jskos")
except PackageNotFoundError:  # pragma: no cover
    # package is not installed
    __version__ = "0.0.0"

# Note that nothing is passed to getLogger to set the "root" logger
logger = logging.getLogger()

LEVEL_COLORS = {
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED,
}


class ColoredLevelFormatter(logging.Formatter):
    """Console formatter that colors the level name of warnings and errors."""

    def format(self, record):
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return message
        levelname = f"{record.levelname:<8}"
        return message.replace(levelname, color + levelname + Style.RESET_ALL, 1)


def setup_logging(loglevel: int = logging.INFO, logfile: Path | None = None):
    """
    Setup logging to console and optionally a file.

    The default loglevel is INFO.
    """
    loglevel_name = os.getenv("LOGLEVEL", "").strip().upper()
    if loglevel_name in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        loglevel = getattr(logging, loglevel_name, logging.INFO)

    # Apply constraints. CRITICAL=FATAL=50 is the maximum, NOTSET=0 the minimum.
    loglevel = min(logging.FATAL, max(loglevel, logging.NOTSET))

    # Setup handler for logging to console
    console = logging.StreamHandler()
    if sys.stderr.isatty():
        console.setFormatter(ColoredLevelFormatter("%(levelname)-8s|%(message)s"))
    logging.basicConfig(
        level=loglevel, format="%(levelname)-8s|%(message)s", handlers=[console]
    )

    if logfile is not None:
        # Setup handler for logging to file
        fh = logging.handlers.RotatingFileHandler(
            logfile, maxBytes=100000, backupCount=5
        )
        fh.setLevel(loglevel)
        fh_formatter = logging.Formatter(
            fmt="%(asctime)s|%(name)-20s|%(levelname)-8s|%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        fh.setFormatter(fh_formatter)
        logger.addHandler(fh)

    # Silence noisy loggers from used packages
    logging.getLogger("rdflib").setLevel(max(loglevel, logging.WARNING))
