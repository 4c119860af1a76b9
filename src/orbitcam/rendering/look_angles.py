"""
Yaw/pitch encoding of a direction relative to an up axis.

The angles describe a direction in the frame spanned by ``up`` and a
reference forward axis orthogonal to it:

- yaw rotates the reference forward axis about ``up`` (right-handed)
- pitch then tilts that ray toward ``up``

For ``up = +Y`` the reference forward axis is ``+X`` and positive yaw turns
it toward ``-Z``. Yaw wraps into (-2pi, 2pi); pitch is clamped short of the
poles so that yaw always stays meaningful.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from orbitcam.shared.math import EPSILON, WORLD_UP, as_vec3, normalize

TWO_PI = 2.0 * math.pi

# Distance kept from the poles, in radians.
PITCH_EPSILON = 0.01
PITCH_LIMIT = 0.5 * math.pi - PITCH_EPSILON


def reference_frame(up: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Orthonormal frame used to measure yaw and pitch.

    Parameters
    ----------
    up : np.ndarray
        Up axis (3,), any non-zero length

    Returns
    -------
    tuple[np.ndarray, np.ndarray, np.ndarray]
        (up, forward, side): unit up, reference forward (yaw = 0) and
        ``up x forward`` (yaw = +pi/2)
    """
    up_n = normalize(as_vec3(up, "up"))
    seed = np.array([1.0, 0.0, 0.0])
    if abs(float(np.dot(seed, up_n))) > 0.9:
        seed = np.array([0.0, 0.0, 1.0])
    forward = normalize(seed - up_n * float(np.dot(seed, up_n)))
    side = np.cross(up_n, forward)
    return up_n, forward, side


def wrap_yaw(yaw: float) -> float:
    """Wrap yaw into (-2pi, 2pi), keeping its sign."""
    return math.fmod(float(yaw), TWO_PI)


def clamp_pitch(pitch: float) -> float:
    """Clamp pitch into [-pi/2 + eps, pi/2 - eps]."""
    return min(max(float(pitch), -PITCH_LIMIT), PITCH_LIMIT)


@dataclass
class LookAngles:
    """
    Yaw/pitch pair describing a direction.

    Always constructed fresh from a direction at the start of an update
    and converted back with :meth:`unit_vector`; never stored across ticks.

    Attributes
    ----------
    yaw : float
        Angle about ``up`` in radians, wrapped into (-2pi, 2pi)
    pitch : float
        Elevation from the plane orthogonal to ``up`` in radians
    up : np.ndarray
        Up axis the angles are measured against
    """

    yaw: float = 0.0
    pitch: float = 0.0
    up: np.ndarray = field(default_factory=lambda: WORLD_UP.copy(), compare=False)

    def __post_init__(self):
        self.up = as_vec3(self.up, "up")
        self.yaw = wrap_yaw(self.yaw)
        self.pitch = clamp_pitch(self.pitch)

    @classmethod
    def from_vector(cls, v, up=WORLD_UP) -> "LookAngles":
        """
        Decompose a direction into yaw and pitch.

        Parameters
        ----------
        v : array-like
            Direction (3,), any non-zero length
        up : array-like
            Up axis the angles are measured against

        Returns
        -------
        LookAngles
            Angles with ``unit_vector()`` parallel to ``v`` (up to the pitch
            clamp at the poles)

        Raises
        ------
        DegenerateVectorError
            If ``v`` is the zero vector
        """
        direction = normalize(as_vec3(v))
        up_n, forward, side = reference_frame(up)

        vertical = float(np.dot(direction, up_n))
        horizontal = direction - up_n * vertical
        if np.linalg.norm(horizontal) < EPSILON:
            # Parallel to up: yaw is undefined, pin it to zero.
            return cls(yaw=0.0, pitch=math.copysign(0.5 * math.pi, vertical), up=up)

        yaw = math.atan2(float(np.dot(horizontal, side)), float(np.dot(horizontal, forward)))
        pitch = math.asin(min(max(vertical, -1.0), 1.0))
        return cls(yaw=yaw, pitch=pitch, up=up)

    def unit_vector(self) -> np.ndarray:
        """Unit direction encoded by these angles."""
        up_n, forward, side = reference_frame(self.up)
        ray = math.cos(self.yaw) * forward + math.sin(self.yaw) * side
        return math.cos(self.pitch) * ray + math.sin(self.pitch) * up_n

    def set_yaw(self, yaw: float) -> None:
        self.yaw = wrap_yaw(yaw)

    def set_pitch(self, pitch: float) -> None:
        self.pitch = clamp_pitch(pitch)

    def add_yaw(self, delta: float) -> None:
        """Rotate about up by ``delta`` radians."""
        self.set_yaw(self.yaw + delta)

    def add_pitch(self, delta: float) -> None:
        """Tilt toward up by ``delta`` radians; saturates at the pole limit."""
        self.set_pitch(self.pitch + delta)
