from __future__ import annotations

import logging
import sys
from logging.config import dictConfig

from twisted.python import log as twisted_log

from fakexhr.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "loggers": {
        "fakexhr": {"level": "DEBUG"},
        "twisted": {"level": "ERROR"},
    },
}

_fakexhr_root_handler: logging.Handler | None = None
_twisted_observer: twisted_log.PythonLoggingObserver | None = None


class TopLevelFormatter(logging.Filter):
    """Keep only the top level part of the logger name of records coming
    from the given loggers.

    With ``loggers=["fakexhr"]`` a record from ``fakexhr.xhr`` is shown as
    coming from ``fakexhr``.
    """

    def __init__(self, loggers: list[str] | None = None):
        super().__init__()
        self.loggers: list[str] = loggers or []

    def filter(self, record: logging.LogRecord) -> bool:
        if any(record.name.startswith(logger + ".") for logger in self.loggers):
            record.name = record.name.split(".", 1)[0]
        return True


def _get_handler(settings: Settings) -> logging.Handler:
    """Return a log handler object according to settings"""
    filename = settings.get("LOG_FILE")
    handler: logging.Handler
    if filename:
        mode = "a" if settings.getbool("LOG_FILE_APPEND") else "w"
        encoding = settings.get("LOG_ENCODING")
        handler = logging.FileHandler(filename, mode=mode, encoding=encoding)
    elif settings.getbool("LOG_ENABLED"):
        handler = logging.StreamHandler()
    else:
        handler = logging.NullHandler()

    formatter = logging.Formatter(
        fmt=settings.get("LOG_FORMAT"), datefmt=settings.get("LOG_DATEFORMAT")
    )
    handler.setFormatter(formatter)
    handler.setLevel(settings.get("LOG_LEVEL"))
    if settings.getbool("LOG_SHORT_NAMES"):
        handler.addFilter(TopLevelFormatter(["fakexhr"]))
    return handler


def _uninstall_fakexhr_root_handler() -> None:
    global _fakexhr_root_handler  # noqa: PLW0603

    if (
        _fakexhr_root_handler is not None
        and _fakexhr_root_handler in logging.root.handlers
    ):
        logging.root.removeHandler(_fakexhr_root_handler)
        _fakexhr_root_handler.close()
    _fakexhr_root_handler = None


def install_fakexhr_root_handler(settings: Settings) -> None:
    global _fakexhr_root_handler  # noqa: PLW0603

    _uninstall_fakexhr_root_handler()
    logging.root.setLevel(logging.NOTSET)
    _fakexhr_root_handler = _get_handler(settings)
    logging.root.addHandler(_fakexhr_root_handler)


def get_fakexhr_root_handler() -> logging.Handler | None:
    return _fakexhr_root_handler


def configure_logging(
    settings: Settings | dict | None = None, install_root_handler: bool = True
) -> None:
    """
    Initialize logging defaults for fakexhr.

    :param settings: settings used to create and configure a handler for the
        root logger (default: None).
    :type settings: dict, :class:`~fakexhr.settings.Settings` object or ``None``

    :param install_root_handler: whether to install root logging handler
        (default: True)
    :type install_root_handler: bool

    This function does:

    - Route warnings and twisted logging through Python standard logging
    - Assign DEBUG and ERROR level to fakexhr and Twisted loggers respectively
    - Create a handler for the root logger according to given settings
    """
    global _twisted_observer  # noqa: PLW0603

    if not sys.warnoptions:
        # Route warnings through python logging
        logging.captureWarnings(True)

    if _twisted_observer is None:
        _twisted_observer = twisted_log.PythonLoggingObserver("twisted")
        _twisted_observer.start()

    dictConfig(DEFAULT_LOGGING)

    if isinstance(settings, dict) or settings is None:
        settings = Settings(settings)

    if install_root_handler:
        install_fakexhr_root_handler(settings)
