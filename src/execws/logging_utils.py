"""Runtime logging helpers."""

from __future__ import annotations

import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

from execws.errors import ConfigurationError

LogProfile = Literal["default", "verbose"]

_VERBOSE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"
_CONFIGURED: tuple[LogProfile, str] | None = None


def _build_console_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(*, profile: LogProfile = "default", level: str = "INFO") -> None:
    """Configure process-level logging once."""

    global _CONFIGURED
    level = level.upper()
    if _CONFIGURED == (profile, level):
        return

    try:
        logger.level(level)
    except ValueError as exc:
        raise ConfigurationError(f"unknown log level: {level}") from exc

    logger.remove()
    if profile == "verbose":
        logger.add(
            sys.stderr,
            level=level,
            format=_VERBOSE_FORMAT,
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            _build_console_handler(),
            level=level,
            format="{message}",
            backtrace=False,
            diagnose=False,
        )
    _CONFIGURED = (profile, level)
