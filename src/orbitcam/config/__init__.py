"""Configuration module for orbitcam."""

from orbitcam.config.settings import (
    AutomaticRotationConfig,
    ControllerConfig,
)


__all__ = [
    "AutomaticRotationConfig",
    "ControllerConfig",
]
