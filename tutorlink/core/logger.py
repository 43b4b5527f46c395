"""Loguru sinks for the tutoring service layer.

Services attach request context with ``logger.bind(...)`` (acting user,
contract, parent). Both sinks render that context after the message as
``key=value`` pairs so audit fields such as ``acting_user_id`` are visible.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from tutorlink.config.settings import Settings, settings as default_settings

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def render_context(extra: dict) -> str:
    """Render bound context as sorted ``key=value`` pairs, empty when nothing is bound."""
    return " ".join(f"{key}={extra[key]}" for key in sorted(extra) if not key.startswith("_"))


def _with_context(template: str):
    def formatter(record) -> str:
        # Values go through extra so braces inside them are never re-parsed
        record["extra"]["_context"] = render_context(record["extra"])
        suffix = " | {extra[_context]}" if record["extra"]["_context"] else ""
        return template + suffix + "\n{exception}"

    return formatter


def setup_logger(app_settings: Settings | None = None) -> None:
    """Configure the console sink and, when LOG_FILE is set, a rotating file sink.

    Level, file path, rotation and retention all come from Settings.
    """
    config = app_settings or default_settings
    logger.remove()

    logger.add(sys.stderr, format=_with_context(_CONSOLE_FORMAT), level=config.log_level, colorize=True)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            format=_with_context(_FILE_FORMAT),
            level=config.log_level,
            rotation=config.log_rotation,
            retention=config.log_retention,
            compression="zip",
            backtrace=True,
            diagnose=True,
        )

    logger.info(f"Logger initialized with level={config.log_level}")
