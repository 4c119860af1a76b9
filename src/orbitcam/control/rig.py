"""
Camera rig: the per-tick driver tying cameras, controllers and events together.

The host owns the loop. Each tick it drains its input accumulator and calls
:meth:`CameraRig.tick`, then hands :meth:`CameraRig.poses` to the renderer.

Scheduling within a tick:

1. automatic rotation over every camera with ``auto_rotate`` set
2. the orbit controller on the single manually controlled camera

A camera that is both auto-rotating and manually controlled gets both
updates in that order; the rig warns about it once per camera.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from orbitcam.config.settings import AutomaticRotationConfig, ControllerConfig
from orbitcam.interaction.events import EventBus, EventType
from orbitcam.interaction.input import TickInput
from orbitcam.rendering.look_state import LookState
from orbitcam.rendering.pose import Pose, project_pose
from orbitcam.shared.exceptions import CameraSelectionError

from .automatic_rotation import AutomaticRotation
from .orbit_controller import OrbitController

logger = logging.getLogger(__name__)


@dataclass
class Camera:
    """
    A camera handle owning its state and controller tuning.

    Attributes
    ----------
    name : str
        Unique name within a rig
    look_state : LookState
        Eye/target/up, mutated in place by the rig
    controller : ControllerConfig
        Sensitivities for manual control
    controllable : bool
        Eligible for manual control when no camera is explicitly active
    auto_rotate : bool
        Marker for the automatic rotation integrator
    """

    name: str
    look_state: LookState = field(default_factory=LookState)
    controller: ControllerConfig = field(default_factory=ControllerConfig)
    controllable: bool = True
    auto_rotate: bool = False

    @property
    def pose(self) -> Pose:
        return project_pose(self.look_state)


class CameraRig:
    """
    Registry of cameras plus the tick driver.

    Parameters
    ----------
    automatic_rotation : AutomaticRotationConfig | None
        Process-wide idle rotation settings
    event_bus : EventBus | None
        Bus receiving CAMERA_MOVED / CONTROL_SKIPPED / ACTIVE_CAMERA_CHANGED
    """

    def __init__(
        self,
        automatic_rotation: AutomaticRotationConfig | None = None,
        event_bus: EventBus | None = None,
    ):
        self.automatic_rotation = AutomaticRotation(automatic_rotation)
        self.events = event_bus or EventBus(name="rig")
        self._cameras: dict[str, Camera] = {}
        self._active: str | None = None
        self._overlap_warned: set[str] = set()

    # =========================================================================
    # Registration and selection
    # =========================================================================

    @property
    def cameras(self) -> list[Camera]:
        return list(self._cameras.values())

    def add(self, camera: Camera) -> Camera:
        """Register a camera; names must be unique."""
        if camera.name in self._cameras:
            raise CameraSelectionError("Camera already registered", camera.name)
        self._cameras[camera.name] = camera
        logger.debug(f"Registered camera {camera.name!r}")
        return camera

    def remove(self, name: str) -> Camera:
        camera = self.get(name)
        del self._cameras[name]
        self._overlap_warned.discard(name)
        if self._active == name:
            self._active = None
        return camera

    def get(self, name: str) -> Camera:
        try:
            return self._cameras[name]
        except KeyError:
            raise CameraSelectionError(
                "Unknown camera", name, sorted(self._cameras)
            ) from None

    def set_active(self, name: str | None) -> None:
        """
        Designate the manually controlled camera.

        ``None`` falls back to the single ``controllable`` camera.
        """
        if name is not None:
            self.get(name)
        if name != self._active:
            self._active = name
            self.events.emit(EventType.ACTIVE_CAMERA_CHANGED, source="rig", camera=name)

    def active_camera(self) -> Camera | None:
        """
        Camera that receives manual input this tick.

        The explicitly selected camera if any, else the only controllable
        camera. Zero or several candidates give None.
        """
        if self._active is not None:
            return self._cameras[self._active]
        candidates = [c for c in self._cameras.values() if c.controllable]
        if len(candidates) == 1:
            return candidates[0]
        return None

    # =========================================================================
    # Tick
    # =========================================================================

    def tick(self, dt: float, tick_input: TickInput | None = None) -> list[str]:
        """
        Run one update pass.

        Parameters
        ----------
        dt : float
            Elapsed seconds since the previous tick
        tick_input : TickInput | None
            Drained input for the manual camera; None means idle

        Returns
        -------
        list[str]
            Names of cameras that moved
        """
        moved: dict[str, None] = {}

        auto_cameras = [c for c in self._cameras.values() if c.auto_rotate]
        moved.update(self._run_automatic(auto_cameras, dt))

        if tick_input is not None:
            name = self._run_manual(tick_input, dt)
            if name is not None:
                moved[name] = None

        for name in moved:
            camera = self._cameras[name]
            self.events.emit(
                EventType.CAMERA_MOVED,
                source="rig",
                camera=name,
                eye=camera.look_state.eye.copy(),
                target=camera.look_state.target.copy(),
            )
        return list(moved)

    def _run_automatic(self, cameras: list[Camera], dt: float) -> dict[str, None]:
        if not cameras or not self.automatic_rotation.config.enabled:
            return {}
        before = {c.name: c.look_state.copy() for c in cameras}
        self.automatic_rotation.update([c.look_state for c in cameras], dt)
        return {
            c.name: None for c in cameras if not c.look_state.isclose(before[c.name], atol=1e-12)
        }

    def _run_manual(self, tick_input: TickInput, dt: float) -> str | None:
        camera = self.active_camera()
        if camera is None:
            count = sum(1 for c in self._cameras.values() if c.controllable)
            if not tick_input.is_idle:
                logger.warning(
                    f"Manual camera control skipped: {count} controllable cameras "
                    f"and none selected"
                )
            self.events.emit(EventType.CONTROL_SKIPPED, source="rig", candidates=count)
            return None

        if camera.auto_rotate and self.automatic_rotation.config.enabled:
            if camera.name not in self._overlap_warned:
                logger.warning(
                    f"Camera {camera.name!r} is both auto-rotating and manually "
                    f"controlled; manual input is applied after the rotation"
                )
                self._overlap_warned.add(camera.name)

        if OrbitController(camera.controller).update(camera.look_state, tick_input, dt):
            return camera.name
        return None

    def poses(self) -> dict[str, Pose]:
        """Renderer pose of every registered camera."""
        return {name: camera.pose for name, camera in self._cameras.items()}
