"""Shared helpers: logging setup, id generation and timestamps."""

# Class Bracket
# Copyright (C) 2025  Class Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import uuid
from datetime import datetime, timezone
from typing import Union

from classbracket.constants import DEFAULT_LOG_LEVEL

PACKAGE_LOGGER_NAME = "classbracket"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_package_logger_configured = False


def _configure_package_logger() -> None:
    """Attach a single stream handler to the package logger."""
    global _package_logger_configured
    if _package_logger_configured:
        return
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(DEFAULT_LOG_LEVEL)
    _package_logger_configured = True


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger that reports through the package handler.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The configured logger
    """
    _configure_package_logger()
    return logging.getLogger(name)


def set_log_level(level: Union[str, int]) -> None:
    """Change the level of every Class Bracket logger."""
    _configure_package_logger()
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(level)


def generate_id(prefix: str = "") -> str:
    """Generate an opaque, stable identifier."""
    token = uuid.uuid4().hex
    return f"{prefix.lower()}_{token}" if prefix else token


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
