"""Logging for skuidsync.

Console records go to stderr with a coloured ``[LEVEL]`` tag (colorama), so
``package`` can still write its payload to stdout. ``--log-file`` adds a
plain, timestamped copy of every record for unattended retrieve runs.

    log = get_logger(__name__)
    log.info("Extracting %d archive(s) into %s", count, target_dir)
    log.debug("Wrote %s", path)  # only with --verbose
"""
import logging
import sys
from typing import Optional

from colorama import Fore, Style

__all__ = ["get_logger", "setup_logging"]

_LEVEL_COLOURS = {
    logging.DEBUG: Style.DIM,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_ROOT_LOGGER_NAME = "skuidsync"
_configured = False


class ColouredFormatter(logging.Formatter):
    """Prefixes each message with its level name in the level's colour."""

    def format(self, record: logging.LogRecord) -> str:
        colour = _LEVEL_COLOURS.get(record.levelno, "")
        return f"{colour}[{record.levelname}]{Style.RESET_ALL} {super().format(record)}"


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbose else logging.INFO


def setup_logging(verbose: bool = False, quiet: bool = False,
                  log_file: Optional[str] = None) -> None:
    """Configure the *skuidsync* logger.

    Safe to call more than once: the console handler is created on the first
    call and later calls only change its level. A file handler is replaced
    whenever *log_file* is given.

    Args:
        verbose: Show debug records.
        quiet: Only show warnings and errors; wins over *verbose*.
        log_file: Also append every record to this file, uncoloured.
    """
    global _configured  # noqa: PLW0603

    level = _level_for(verbose, quiet)
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(level)

    console = [h for h in root.handlers if not isinstance(h, logging.FileHandler)]
    if not console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColouredFormatter("%(message)s"))
        root.addHandler(handler)
        console = [handler]
    for handler in console:
        handler.setLevel(level)

    if log_file:
        for handler in [h for h in root.handlers if isinstance(h, logging.FileHandler)]:
            root.removeHandler(handler)
            handler.close()
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        file_handler.setLevel(level)
        root.addHandler(file_handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the *skuidsync* namespace.

    Applies the default ``INFO`` setup if :func:`setup_logging` was not
    called yet.
    """
    if not _configured:
        setup_logging()

    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
