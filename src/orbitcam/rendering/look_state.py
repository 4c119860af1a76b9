"""
Camera state as an eye, the target it looks at, and an up reference.

This is the single piece of mutable per-camera state. The orbit controller
and the automatic rotation integrator both read and write it in place; the
renderer only sees the :class:`~orbitcam.rendering.pose.Pose` derived from it.

Design principle: store what the controllers mutate.
- eye/target/up are primary, stored as float64 (3,) arrays
- radius and look direction are derived on demand
- the radius is clamped into a positive range after every core mutation,
  so the eye can never collapse onto the target
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from orbitcam.shared.math import WORLD_UP, as_vec3, try_normalize

DEFAULT_MIN_RADIUS = 1e-3
DEFAULT_MAX_RADIUS = 1e6


def _default_eye() -> np.ndarray:
    return np.array([0.0, 0.0, 5.0])


def _default_target() -> np.ndarray:
    return np.zeros(3)


def _default_up() -> np.ndarray:
    return WORLD_UP.copy()


def clamp_radius(
    radius: float,
    min_radius: float = DEFAULT_MIN_RADIUS,
    max_radius: float = DEFAULT_MAX_RADIUS,
) -> float:
    """Clamp a radius into [min_radius, max_radius]; NaN maps to min_radius."""
    if not np.isfinite(radius):
        return max_radius if radius == np.inf else min_radius
    return float(min(max(radius, min_radius), max_radius))


@dataclass
class LookState:
    """
    Where a camera is and what it looks at.

    Attributes
    ----------
    eye : np.ndarray
        (3,) camera position
    target : np.ndarray
        (3,) point being looked at
    up : np.ndarray
        (3,) world-up reference for roll-free orientation. Must be non-zero,
        need not be normalized.
    """

    eye: np.ndarray = field(default_factory=_default_eye)
    target: np.ndarray = field(default_factory=_default_target)
    up: np.ndarray = field(default_factory=_default_up)

    def __post_init__(self):
        """Validate and normalize inputs."""
        self.eye = as_vec3(self.eye, "eye")
        self.target = as_vec3(self.target, "target")
        self.up = as_vec3(self.up, "up")
        if try_normalize(self.up) is None:
            raise ValueError("up must be a non-zero vector")

    # =========================================================================
    # Derived quantities
    # =========================================================================

    @property
    def radius(self) -> float:
        """Distance between eye and target."""
        return float(np.linalg.norm(self.target - self.eye))

    def look_direction(self) -> np.ndarray | None:
        """Unit eye-to-target direction, or None when ``eye == target``."""
        return try_normalize(self.target - self.eye)

    @property
    def up_direction(self) -> np.ndarray:
        """Unit up reference."""
        return self.up / np.linalg.norm(self.up)

    # =========================================================================
    # Mutation
    # =========================================================================

    def set_from_forward(self, target: np.ndarray, forward: np.ndarray, radius: float) -> None:
        """Place the eye ``radius`` behind ``target`` along unit ``forward``."""
        self.target = as_vec3(target, "target")
        self.eye = self.target - as_vec3(forward, "forward") * radius

    def clamp_radius(
        self,
        min_radius: float = DEFAULT_MIN_RADIUS,
        max_radius: float = DEFAULT_MAX_RADIUS,
    ) -> bool:
        """
        Move the eye along the view ray so the radius lies in range.

        Returns
        -------
        bool
            True if the eye moved. A state with ``eye == target`` has no
            view ray and is left unchanged.
        """
        direction = self.look_direction()
        if direction is None:
            return False
        radius = self.radius
        clamped = clamp_radius(radius, min_radius, max_radius)
        if clamped == radius:
            return False
        self.eye = self.target - direction * clamped
        return True

    # =========================================================================
    # Conversion
    # =========================================================================

    def copy(self) -> "LookState":
        """Create a deep copy of this state."""
        return LookState(eye=self.eye.copy(), target=self.target.copy(), up=self.up.copy())

    def to_dict(self) -> dict[str, list[float]]:
        """Plain-float representation for serialization."""
        return {
            "eye": [float(c) for c in self.eye],
            "target": [float(c) for c in self.target],
            "up": [float(c) for c in self.up],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LookState":
        """Inverse of :meth:`to_dict`; missing keys fall back to defaults."""
        kwargs = {key: data[key] for key in ("eye", "target", "up") if key in data}
        return cls(**kwargs)

    def isclose(self, other: "LookState", atol: float = 1e-6) -> bool:
        """Component-wise comparison within ``atol``."""
        return (
            np.allclose(self.eye, other.eye, rtol=0.0, atol=atol)
            and np.allclose(self.target, other.target, rtol=0.0, atol=atol)
            and np.allclose(self.up, other.up, rtol=0.0, atol=atol)
        )
