"""
Orbit controller: turns one tick of input into orbit, pan and zoom.

Update order within a tick is fixed:

1. derive forward direction and radius from the LookState
2. rotate (orbit angles of the target-to-eye offset, pole guarded)
3. pan the target in the *post-rotation* basis, world up as vertical axis
4. zoom by the product of all scroll events, radius clamped
5. place the eye ``radius`` behind the target along forward

Pointer motion is used by both rotate and pan when both triggers are held.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from orbitcam.config.settings import ControllerConfig
from orbitcam.interaction.input import ScrollEvent, TickInput
from orbitcam.rendering.look_angles import LookAngles
from orbitcam.rendering.look_state import LookState, clamp_radius
from orbitcam.shared.math import try_normalize

logger = logging.getLogger(__name__)

# Rotations ending with |dot(forward, up)| above this are rejected.
POLE_GUARD = 0.99


def fold_scroll(
    events: Iterable[ScrollEvent],
    zoom_sensitivity: float,
    pixels_per_line: float,
) -> float:
    """
    Fold a tick's wheel events into one radius multiplier.

    Starts at 1.0 and multiplies by ``1 - lines * zoom_sensitivity`` per
    event, so positive amounts shrink the radius (zoom in).
    """
    factor = 1.0
    for event in events:
        factor *= 1.0 - event.lines(pixels_per_line) * zoom_sensitivity
    return factor


def clamp_cursor_delta(delta: np.ndarray, max_delta: float | None) -> np.ndarray:
    """Clamp each axis of the summed pointer delta to ``±max_delta``."""
    delta = np.asarray(delta, dtype=np.float64)
    if max_delta is None:
        return delta.copy()
    return np.clip(delta, -max_delta, max_delta)


def rotate_forward(
    forward: np.ndarray,
    up: np.ndarray,
    yaw_delta: float,
    pitch_delta: float,
) -> tuple[np.ndarray, bool]:
    """
    Orbit a unit forward direction by yaw/pitch deltas.

    The deltas apply to the angles of the target-to-eye offset: positive yaw
    turns the eye right-handed about ``up``, positive pitch raises the eye.

    Returns
    -------
    tuple[np.ndarray, bool]
        (new forward, accepted). When the result would come within the pole
        guard of ``up`` the original forward is returned with False.
    """
    angles = LookAngles.from_vector(-forward, up)
    angles.add_yaw(yaw_delta)
    angles.add_pitch(pitch_delta)
    candidate = -angles.unit_vector()

    if abs(float(np.dot(candidate, up))) > POLE_GUARD:
        return forward, False
    return candidate, True


def orbit_step(
    state: LookState,
    tick: TickInput,
    config: ControllerConfig,
    dt: float,
) -> LookState:
    """
    Compute the LookState after one tick of input.

    Pure: ``state`` is not modified.

    Parameters
    ----------
    state : LookState
        Current camera state
    tick : TickInput
        Input accumulated since the previous tick
    config : ControllerConfig
        Sensitivities and radius range
    dt : float
        Elapsed seconds, ``>= 0``

    Returns
    -------
    LookState
        New state. Equal to ``state`` when eye and target coincide or the
        update would produce non-finite values.
    """
    if dt < 0:
        raise ValueError(f"dt must be non-negative, got {dt}")

    forward = state.look_direction()
    if forward is None:
        logger.warning("Eye coincides with target, skipping orbit update")
        return state.copy()

    up = state.up_direction
    radius = state.radius
    target = state.target.copy()
    cursor = clamp_cursor_delta(tick.cursor_delta, config.max_cursor_delta)

    # ROTATE: changes forward
    if tick.rotate_active:
        delta = np.asarray(config.mouse_rotate_sensitivity) * cursor
        forward, accepted = rotate_forward(forward, up, dt * -delta[0], dt * delta[1])
        if not accepted:
            logger.debug("Rotation rejected near the pole, keeping previous forward")

    # PAN: changes target
    if tick.pan_active:
        delta = np.asarray(config.mouse_translate_sensitivity) * cursor
        right = try_normalize(np.cross(up, forward))
        offset = delta[1] * up
        if right is not None:
            offset = offset + delta[0] * right
        target = target + dt * offset

    # ZOOM: changes radius
    factor = fold_scroll(tick.scroll, config.mouse_wheel_zoom_sensitivity, config.pixels_per_line)
    radius = clamp_radius(radius * factor, config.min_radius, config.max_radius)

    new_state = LookState(eye=target - forward * radius, target=target, up=state.up)
    if not (np.all(np.isfinite(new_state.eye)) and np.all(np.isfinite(new_state.target))):
        logger.warning("Orbit update produced non-finite values, keeping previous state")
        return state.copy()
    return new_state


class OrbitController:
    """
    Applies :func:`orbit_step` to a LookState in place.

    Parameters
    ----------
    config : ControllerConfig
        Sensitivities used for every update
    """

    def __init__(self, config: ControllerConfig | None = None):
        self.config = config or ControllerConfig()

    def update(self, state: LookState, tick: TickInput, dt: float) -> bool:
        """
        Advance ``state`` by one tick.

        Returns
        -------
        bool
            True if eye or target changed
        """
        new_state = orbit_step(state, tick, self.config, dt)
        moved = not new_state.isclose(state, atol=1e-12)
        state.eye = new_state.eye
        state.target = new_state.target
        return moved
