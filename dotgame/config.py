"""Tunable coefficients for the dot simulation."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

# World
SCREEN_WIDTH: float = 1280.0
SCREEN_HEIGHT: float = 720.0
MAX_DOTS: int = 1000
DOT_RADIUS: float = 5.0
INTERACTION_RADIUS: float = 50.0

DEFAULT_CONFIG_PATH = "dotgame_config.json"

MIN_MAX_SPEED = 1.0
MAX_MAX_SPEED = 20.0


class ConfigError(Exception):
    """Raised when a configuration file cannot be written or read back."""


class ConfigFile(BaseModel):
    """Schema of a saved configuration file."""
    max_speed: float = Field(gt=0.0)
    attraction_strength: float
    repulsion_strength: float
    friction: float = Field(ge=0.0, le=1.0)
    bounce_damping: float = Field(ge=0.0, le=1.0)
    interaction_radius: float = Field(gt=0.0)
    eating_radius: float = Field(ge=0.0)
    growth_rate: float = Field(ge=0.0)
    divide_size: float = Field(gt=0.0)


@dataclass(frozen=True)
class DotConfig:
    """Configuration shared by every dot during a tick."""

    # Motion
    max_speed: float = 5.0
    friction: float = 0.98
    bounce_damping: float = 0.8

    # Pairwise forces
    attraction_strength: float = 0.5
    repulsion_strength: float = 2.0
    interaction_radius: float = INTERACTION_RADIUS

    # Lifecycle
    eating_radius: float = 15.0
    growth_rate: float = 0.01
    divide_size: float = 20.0

    def to_dict(self) -> Dict[str, float]:
        """Convert config to dictionary for JSON serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DotConfig":
        """Create a DotConfig from a dictionary, validating every field."""
        try:
            parsed = ConfigFile.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
        return cls(**parsed.model_dump())

    def with_max_speed(self, delta: float) -> "DotConfig":
        """Return a copy with max_speed nudged by delta, clamped to [1, 20]."""
        speed = max(MIN_MAX_SPEED, min(MAX_MAX_SPEED, self.max_speed + delta))
        return replace(self, max_speed=speed)

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file"""
        directory = os.path.dirname(filepath)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(filepath, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as exc:
            raise ConfigError(f"Could not write {filepath}: {exc}") from exc
        logger.info("Configuration saved to %s", filepath)

    @classmethod
    def load(cls, filepath: str) -> "DotConfig":
        """Load configuration from JSON file"""
        try:
            with open(filepath, "r") as f:
                data = json.load(f)
        except OSError as exc:
            raise ConfigError(f"Could not read {filepath}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Malformed JSON in {filepath}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Expected a JSON object in {filepath}")
        config = cls.from_dict(data)
        logger.info("Configuration loaded from %s", filepath)
        return config


DEFAULT_CONFIG = DotConfig()
