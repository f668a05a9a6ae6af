"""Logging configuration for commit-gen."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Final


LOG_LEVEL_ENV_VAR: Final[str] = "COMMIT_GEN_LOG_LEVEL"
NO_COLOR_ENV_VAR: Final[str] = "NO_COLOR"

_REGISTERED_LOGGERS: set[logging.Logger] = set()

_DEFAULT_FORMAT: Final[str] = "%(message)s"
_RESET: Final[str] = "\033[0m"
_BOLD: Final[str] = "\033[1m"
_DIM: Final[str] = "\033[2m"


def _ansi_color(code: int) -> str:
    """Return the ANSI escape sequence for a 256-color foreground."""

    return f"\033[38;5;{code}m"


@dataclass(frozen=True)
class _LevelStyle:
    """How a single log level is rendered on the terminal."""

    tag: str
    color: str
    bold: bool = False
    dim: bool = False

    def render(self, message: str, logger_name: str, use_color: bool = True) -> str:
        """Wrap *message* in the level's prefix and, optionally, ANSI styles."""

        prefix = f"[commit-gen {self.tag} {logger_name}]"
        if not use_color:
            return f"{prefix} {message}"

        styles = (_BOLD if self.bold else "") + (_DIM if self.dim else "") + self.color
        return f"{styles}{prefix} {message}{_RESET}"


_LEVEL_STYLES: Final[dict[int, _LevelStyle]] = {
    logging.DEBUG: _LevelStyle("DBG", _ansi_color(244), dim=True),
    logging.INFO: _LevelStyle("INF", _ansi_color(39)),
    logging.WARNING: _LevelStyle("WRN", _ansi_color(214), bold=True),
    logging.ERROR: _LevelStyle("ERR", _ansi_color(196), bold=True),
    logging.CRITICAL: _LevelStyle("CRT", _ansi_color(201), bold=True),
}


class _ColorFormatter(logging.Formatter):
    """Formatter that prefixes records with a level tag, colored on request."""

    def __init__(self, fmt: str = _DEFAULT_FORMAT, use_color: bool = True) -> None:
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        style = _LEVEL_STYLES.get(record.levelno)
        if style is None:
            return message

        return style.render(message, record.name, self.use_color)


def _wants_color(stream: object) -> bool:
    """Color only interactive streams, and never when NO_COLOR is set."""

    if os.getenv(NO_COLOR_ENV_VAR):
        return False

    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _level_from_env() -> int | None:
    """Return the log level named by the environment, if any."""

    level_name = os.getenv(LOG_LEVEL_ENV_VAR)
    if not level_name:
        return None

    level = getattr(logging, level_name.upper(), None)
    return level if isinstance(level, int) else None


def commit_gen_logger(name: str) -> logging.Logger:
    """Return a logger with commit-gen's formatter attached.

    Records always go to stderr so they never interleave with the commit
    message the CLI prints on stdout.
    """

    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            _ColorFormatter(_DEFAULT_FORMAT, use_color=_wants_color(handler.stream))
        )
        logger.addHandler(handler)

    level = _level_from_env()
    if level is not None:
        logger.setLevel(level)

    _REGISTERED_LOGGERS.add(logger)
    return logger


def set_commit_gen_log_level(level_name: str) -> None:
    """Set the log level for every commit-gen logger created so far."""

    os.environ[LOG_LEVEL_ENV_VAR] = level_name
    level = _level_from_env()
    if level is None:
        level = logging.NOTSET

    for logger in _REGISTERED_LOGGERS:
        logger.setLevel(level)
