"""Application and layout configuration.

Configuration is a small JSON document::

    {
        "store_path": "tournament.json",
        "log_level": "INFO",
        "layout": {"base_radius": 1500, "radius_step": 200}
    }

Every key is optional.
"""

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

import json
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from classbracket.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_BASE_RADIUS,
    DEFAULT_CENTER_X,
    DEFAULT_CENTER_Y,
    DEFAULT_LOG_LEVEL,
    DEFAULT_RADIUS_STEP,
    DEFAULT_START_ANGLE,
)
from classbracket.exceptions import InvalidConfigurationException
from classbracket.utils import setup_logger

logger = setup_logger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry of the radial bracket.

    Attributes:
        center_x: X coordinate shared by every ring
        center_y: Y coordinate shared by every ring
        base_radius: Radius of the innermost (most wins) ring
        radius_step: Extra radius per win below the maximum
        start_angle: Angle of the first student on each ring, in radians
    """

    center_x: float = DEFAULT_CENTER_X
    center_y: float = DEFAULT_CENTER_Y
    base_radius: float = DEFAULT_BASE_RADIUS
    radius_step: float = DEFAULT_RADIUS_STEP
    start_angle: float = DEFAULT_START_ANGLE

    def __post_init__(self) -> None:
        for name, value in self.to_dict().items():
            if not math.isfinite(value):
                raise InvalidConfigurationException(f"{name} must be a finite number")
        if self.base_radius <= 0:
            raise InvalidConfigurationException("base_radius must be positive")
        if self.radius_step < 0:
            raise InvalidConfigurationException("radius_step must not be negative")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "center_x": self.center_x,
            "center_y": self.center_y,
            "base_radius": self.base_radius,
            "radius_step": self.radius_step,
            "start_angle": self.start_angle,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfig":
        """Deserialize configuration from dictionary."""
        defaults = cls()
        try:
            return cls(
                center_x=float(data.get("center_x", defaults.center_x)),
                center_y=float(data.get("center_y", defaults.center_y)),
                base_radius=float(data.get("base_radius", defaults.base_radius)),
                radius_step=float(data.get("radius_step", defaults.radius_step)),
                start_angle=float(data.get("start_angle", defaults.start_angle)),
            )
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationException(f"Invalid layout value: {e}") from e


@dataclass
class AppConfig:
    """Top level settings.

    Attributes:
        store_path: JSON file backing the roster, or None for an in-memory store
        log_level: Name of the logging level
        layout: Radial bracket geometry
    """

    store_path: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise InvalidConfigurationException(
                f"Invalid log level: {self.log_level!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "store_path": str(self.store_path) if self.store_path else None,
            "log_level": self.log_level,
            "layout": self.layout.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Deserialize configuration from dictionary."""
        if not isinstance(data, dict):
            raise InvalidConfigurationException("Configuration must be a JSON object")
        store_path = data.get("store_path")
        if store_path is not None and not isinstance(store_path, str):
            raise InvalidConfigurationException("store_path must be a string")
        layout = data.get("layout") or {}
        if not isinstance(layout, dict):
            raise InvalidConfigurationException("layout must be a JSON object")
        return cls(
            store_path=Path(store_path) if store_path else None,
            log_level=str(data.get("log_level", DEFAULT_LOG_LEVEL)),
            layout=LayoutConfig.from_dict(layout),
        )


def default_config_path() -> Optional[Path]:
    """Config path named by the environment, if any."""
    value = os.environ.get(CONFIG_ENV_VAR)
    return Path(value) if value else None


def load_config(path: Union[str, Path, None] = None) -> AppConfig:
    """Load configuration from a JSON file.

    Args:
        path: Config file; defaults to the file named by ``CLASSBRACKET_CONFIG``

    Returns:
        The loaded configuration, or defaults when no file exists

    Raises:
        InvalidConfigurationException: If the file is not valid configuration
    """
    config_path = Path(path) if path else default_config_path()
    if config_path is None or not config_path.exists():
        if config_path is not None:
            logger.info(f"No config file at {config_path}, using defaults")
        return AppConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfigurationException(
            f"Config file {config_path} is not valid JSON: {e}"
        ) from e

    config = AppConfig.from_dict(data)
    logger.debug(f"Loaded configuration from {config_path}")
    return config


def with_overrides(
    config: AppConfig,
    store_path: Union[str, Path, None] = None,
    log_level: Optional[str] = None,
) -> AppConfig:
    """Apply command line overrides on top of a loaded configuration."""
    return AppConfig(
        store_path=Path(store_path) if store_path else config.store_path,
        log_level=log_level or config.log_level,
        layout=config.layout,
    )
