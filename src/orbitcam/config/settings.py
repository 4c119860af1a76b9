"""
Configuration dataclasses for orbitcam.

Controller sensitivities and the automatic rotation switch are plain
dataclasses validated in ``__post_init__``; they are read-only to the
controllers during a tick and changed only by the embedding application.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any

from orbitcam.rendering.look_state import DEFAULT_MAX_RADIUS, DEFAULT_MIN_RADIUS
from orbitcam.shared.exceptions import ConfigError

logger = logging.getLogger(__name__)


def _as_pair(value: Any, field_name: str) -> tuple[float, float]:
    """Accept a scalar (splatted) or a 2-sequence."""
    if isinstance(value, (int, float)):
        return (float(value), float(value))
    try:
        x, y = value
        return (float(x), float(y))
    except (TypeError, ValueError) as e:
        raise ConfigError("Expected a number or a pair of numbers", field_name, value) from e


def _known_fields(cls, data: dict[str, Any]) -> dict[str, Any]:
    """Keep keys that are init fields of ``cls``; warn about the rest."""
    names = {f.name for f in fields(cls) if f.init}
    unknown = sorted(set(data) - names)
    if unknown:
        logger.warning(f"Ignoring unknown {cls.__name__} keys: {', '.join(unknown)}")
    return {key: value for key, value in data.items() if key in names}


@dataclass
class ControllerConfig:
    """User-tunable sensitivities of the orbit controller.

    Attributes
    ----------
    mouse_rotate_sensitivity : tuple[float, float]
        Radians per pixel-second of pointer motion, per axis
    mouse_translate_sensitivity : tuple[float, float]
        World units per pixel-second of pointer motion, per axis
    mouse_wheel_zoom_sensitivity : float
        Fraction of the radius removed per scrolled line
    pixels_per_line : float
        Conversion of pixel-unit scroll events to lines
    max_cursor_delta : float | None
        Per-axis clamp of the summed pointer delta of a tick (None = off)
    min_radius, max_radius : float
        Range the eye-target distance is kept in
    """

    mouse_rotate_sensitivity: tuple[float, float] = (0.08, 0.08)
    mouse_translate_sensitivity: tuple[float, float] = (0.1, 0.1)
    mouse_wheel_zoom_sensitivity: float = 0.2
    pixels_per_line: float = 53.0
    max_cursor_delta: float | None = None
    min_radius: float = DEFAULT_MIN_RADIUS
    max_radius: float = DEFAULT_MAX_RADIUS

    def __post_init__(self):
        """Validate settings after initialization."""
        self.mouse_rotate_sensitivity = _as_pair(
            self.mouse_rotate_sensitivity, "mouse_rotate_sensitivity"
        )
        self.mouse_translate_sensitivity = _as_pair(
            self.mouse_translate_sensitivity, "mouse_translate_sensitivity"
        )
        self.mouse_wheel_zoom_sensitivity = float(self.mouse_wheel_zoom_sensitivity)

        if self.pixels_per_line <= 0:
            raise ConfigError("pixels_per_line must be positive", "pixels_per_line", self.pixels_per_line)
        if self.max_cursor_delta is not None and self.max_cursor_delta <= 0:
            raise ConfigError(
                "max_cursor_delta must be positive or None", "max_cursor_delta", self.max_cursor_delta
            )
        if not 0 < self.min_radius < self.max_radius:
            raise ConfigError(
                "Radius range must satisfy 0 < min_radius < max_radius",
                "min_radius",
                (self.min_radius, self.max_radius),
            )

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary (tuples become lists)."""
        data = asdict(self)
        data["mouse_rotate_sensitivity"] = list(self.mouse_rotate_sensitivity)
        data["mouse_translate_sensitivity"] = list(self.mouse_translate_sensitivity)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ControllerConfig":
        return cls(**_known_fields(cls, data))


@dataclass
class AutomaticRotationConfig:
    """Idle orbit about the up axis.

    Attributes
    ----------
    enabled : bool
        Whether marked cameras rotate on their own
    sensitivity : float
        Rotation rate in radians per second
    fixed_step : float | None
        If set, integrate in fixed steps of this many seconds of simulated
        time instead of once per tick
    """

    enabled: bool = False
    sensitivity: float = 1.0
    fixed_step: float | None = None

    def __post_init__(self):
        """Validate settings after initialization."""
        self.enabled = bool(self.enabled)
        self.sensitivity = float(self.sensitivity)
        if self.fixed_step is not None and self.fixed_step <= 0:
            raise ConfigError("fixed_step must be positive or None", "fixed_step", self.fixed_step)

    def to_dict(self) -> dict[str, object]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AutomaticRotationConfig":
        return cls(**_known_fields(cls, data))
