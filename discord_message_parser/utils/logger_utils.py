"""Logging setup for the message parser.

Library modules only ask :meth:`LoggerUtils.get_logger` for a logger under the
``DiscordMessageParser`` namespace and never attach handlers themselves. Output is
enabled once per process by constructing :class:`LoggerUtils`, which the command line
does at start-up.
"""

from __future__ import annotations

import logging
import sys
import warnings
from logging import Formatter, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Literal, NamedTuple, Self, TextIO, TypeAlias

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["LogLevel", "LoggerUtils"]

LevelType: TypeAlias = Literal["NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

NAMESPACE: Final[str] = "DiscordMessageParser"

_LOG_FILE_MAX_BYTES: Final[int] = 1024 * 1024
_LOG_FILE_BACKUPS: Final[int] = 2
_CONSOLE_FORMAT: Final[str] = "%(message)s"
_FILE_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d\t%(funcName)s\t%(message)s"


class LogLevel(NamedTuple):
    name: str
    value: int


class LoggerUtils:
    """Process-wide switch for the parser's log output.

    The first instance attaches a stderr handler (warnings and errors, message only) and,
    when a file name is given, a rotating UTF-8 file handler that records everything down
    to DEBUG. Python warnings are routed to the same logger. Later instances share that
    configuration and change nothing.

    Args:
        filename (str | Path): Log file. An empty name disables file logging.
    """

    _instance: ClassVar[Self | None] = None
    _configured: ClassVar[bool] = False

    def __new__(cls, *args, **kwargs) -> Self:
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, filename: str | Path = "") -> None:
        if LoggerUtils._configured:
            return

        logger: logging.Logger = self.root_logger
        logger.setLevel(logging.INFO)

        console: StreamHandler[TextIO] = StreamHandler(sys.stderr)
        console.setLevel(logging.WARNING)
        console.setFormatter(Formatter(_CONSOLE_FORMAT))
        logger.addHandler(console)

        if str(filename).strip():
            self._add_file_handler(str(filename))

        warnings.showwarning = self._show_warning
        LoggerUtils._configured = True

    @property
    def root_logger(self) -> logging.Logger:
        return logging.getLogger(NAMESPACE)

    def _add_file_handler(self, filename: str) -> None:
        try:
            handler = RotatingFileHandler(
                filename,
                maxBytes=_LOG_FILE_MAX_BYTES,
                backupCount=_LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        except OSError as err:
            self.root_logger.error("Cannot open log file %s: %s", filename, err)
            return
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(Formatter(_FILE_FORMAT))
        self.root_logger.addHandler(handler)

    def _show_warning(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        _ = file, line
        self.root_logger.warning("%s:%d: %s: %s", filename, lineno, category.__name__, message)

    def set_level(self, level: LevelType) -> None:
        """Set the namespace logger level by name; unknown names select INFO with a warning."""
        value: int | None = logging.getLevelNamesMapping().get(level.upper())
        if value is None:
            self.root_logger.setLevel(logging.INFO)
            self.root_logger.warning("Unknown logging level '%s'; using INFO.", level)
            return
        self.root_logger.setLevel(value)

    def get_level(self) -> LogLevel:
        value: int = self.root_logger.getEffectiveLevel()
        return LogLevel(logging.getLevelName(value), value)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Return ``DiscordMessageParser.<name>``, or the namespace logger itself when name is empty."""
        return logging.getLogger(f"{NAMESPACE}.{name}" if name else NAMESPACE)
