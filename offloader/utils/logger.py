"""Logging for the offloader.

Console output is coloured with *colorama* and tagged ``[S3Offload]``;
``--verbose`` / ``--quiet`` pick the level. Every package logger and
handler carries a redaction filter, so access keys registered with
:func:`register_secret` never reach a log line in clear, including lines
that propagate to handlers owned by a host application.

Usage::

    from offloader.utils.logger import get_logger

    log = get_logger(__name__)
    log.info("Uploaded to S3: %s", key)
    log.warning("S3 upload error for %s: %s", key, detail)
    log.debug("Object key for %s = %s", path, key)  # --verbose only
"""
import logging
import os
import sys
import threading
from typing import Optional

from colorama import Fore, Style

__all__ = ["get_logger", "setup_logging", "mask_secret", "register_secret"]

LOG_TAG = "[S3Offload]"
_ROOT_LOGGER_NAME = "offloader"

_LEVEL_COLOURS = {
    logging.DEBUG: Fore.WHITE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


def mask_secret(value) -> str:
    """Mask a secret for display, keeping the first four characters.

    Example:
        >>> mask_secret("AKIAEXAMPLEKEY")
        'AKIA...********'
        >>> mask_secret("")
        ''
    """
    if not value:
        return ""
    value = str(value)
    if len(value) > 4:
        return f"{value[:4]}...{'*' * 8}"
    return '*' * 8


class SecretRedactionFilter(logging.Filter):
    """Replaces registered secret values in records with their masked form."""

    def __init__(self):
        super().__init__()
        self._secrets = set()
        self._lock = threading.Lock()

    def add(self, value):
        if value and len(str(value)) > 4:
            with self._lock:
                self._secrets.add(str(value))

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True

        with self._lock:
            secrets = tuple(self._secrets)

        message = record.getMessage()
        redacted = message
        for secret in secrets:
            if secret in redacted:
                redacted = redacted.replace(secret, mask_secret(secret))

        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class ColouredFormatter(logging.Formatter):
    """Prepends a coloured level tag to each line."""

    def format(self, record: logging.LogRecord) -> str:
        colour = _LEVEL_COLOURS.get(record.levelno, "")
        return f"{colour}[{record.levelname}]{Style.RESET_ALL} {super().format(record)}"


_redaction = SecretRedactionFilter()
_configured = False


def register_secret(value) -> None:
    """Mask *value* wherever it shows up in future log output."""
    _redaction.add(value)


def _attach_redaction(logger):
    # Logger filters only see records created on that logger, so each
    # package logger needs its own reference.
    if _redaction not in logger.filters:
        logger.addFilter(_redaction)


def setup_logging(verbose: bool = False, quiet: bool = False,
                  log_file: Optional[str] = None) -> None:
    """Configure the root *offloader* logger.

    Safe to call more than once; later calls only adjust levels and add a
    file handler that is not attached yet.

    Args:
        verbose: ``DEBUG`` level.
        quiet: ``WARNING`` level (wins over *verbose*).
        log_file: Also append uncoloured lines to this file.
    """
    global _configured  # noqa: PLW0603

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(level)
    _attach_redaction(root)

    if not any(getattr(h, "_offloader_console", False) for h in root.handlers):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ColouredFormatter(f"{LOG_TAG} %(message)s"))
        console.addFilter(_redaction)
        console._offloader_console = True
        root.addHandler(console)

    log_file = os.path.abspath(log_file) if log_file else None
    if log_file and not any(getattr(h, "baseFilename", None) == log_file for h in root.handlers):
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(f"%(asctime)s %(levelname)s {LOG_TAG} %(name)s: %(message)s")
        )
        file_handler.addFilter(_redaction)
        root.addHandler(file_handler)

    for handler in root.handlers:
        handler.setLevel(level)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the *offloader* namespace.

    Applies the default ``INFO`` setup on first use.
    """
    if not _configured:
        setup_logging()

    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(name)
    _attach_redaction(logger)
    return logger
