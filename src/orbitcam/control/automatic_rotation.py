"""
Automatic (idle) rotation about the up axis.

Rates are in radians per second of simulated time, so the orbit speed does
not depend on the frame rate. Two integration modes:

- variable step (default): rotate by ``sensitivity * dt`` every tick
- fixed step: accumulate ``dt`` and rotate in steps of ``fixed_step``
  seconds, carrying the remainder to the next tick
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from orbitcam.config.settings import AutomaticRotationConfig
from orbitcam.rendering.look_state import LookState
from orbitcam.rendering.quaternion_utils import quat_from_axis_angle, quat_rotate_vector
from orbitcam.shared.math import normalize

logger = logging.getLogger(__name__)


def rotate_about_up(state: LookState, angle: float) -> bool:
    """
    Orbit the eye ``angle`` radians about the up axis through the target.

    The radius and the elevation above the target are preserved, except
    that a radius outside the default range is clamped back into it.

    Returns
    -------
    bool
        False if the state has no view direction (``eye == target``)
    """
    forward = state.look_direction()
    if forward is None:
        return False

    radius = state.radius
    q = quat_from_axis_angle(state.up_direction, angle)
    forward = normalize(quat_rotate_vector(q, forward))
    state.set_from_forward(state.target, forward, radius)
    state.clamp_radius()
    return True


class AutomaticRotation:
    """
    Integrates idle rotation for every camera carrying the auto-rotate marker.

    Parameters
    ----------
    config : AutomaticRotationConfig
        Shared, externally owned switch and rate. Read on every update so
        toggling ``config.enabled`` takes effect on the next tick.
    """

    def __init__(self, config: AutomaticRotationConfig | None = None):
        self.config = config or AutomaticRotationConfig()
        self._accumulated = 0.0

    def angle_for(self, dt: float) -> float:
        """
        Rotation angle to apply for a tick of ``dt`` seconds.

        In fixed-step mode this consumes whole steps from the accumulator.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")

        step = self.config.fixed_step
        if step is None:
            return self.config.sensitivity * dt

        self._accumulated += dt
        steps = int(np.floor(self._accumulated / step + 1e-9))
        self._accumulated = max(self._accumulated - steps * step, 0.0)
        return self.config.sensitivity * step * steps

    def update(self, states: Iterable[LookState], dt: float) -> int:
        """
        Rotate each state by this tick's angle.

        Returns
        -------
        int
            Number of states that were rotated
        """
        if not self.config.enabled:
            self._accumulated = 0.0
            return 0

        angle = self.angle_for(dt)
        if angle == 0.0:
            return 0

        rotated = 0
        for state in states:
            if rotate_about_up(state, angle):
                rotated += 1
            else:
                logger.warning("Eye coincides with target, skipping automatic rotation")
        return rotated

    def reset(self) -> None:
        """Drop any partially accumulated fixed-step time."""
        self._accumulated = 0.0
