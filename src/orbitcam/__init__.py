"""orbitcam: orbit-style third-person camera controller."""

from orbitcam.config.settings import AutomaticRotationConfig, ControllerConfig
from orbitcam.control.automatic_rotation import AutomaticRotation
from orbitcam.control.orbit_controller import OrbitController, orbit_step
from orbitcam.control.rig import Camera, CameraRig
from orbitcam.interaction.input import InputAccumulator, ScrollEvent, ScrollUnit, TickInput
from orbitcam.rendering.look_angles import LookAngles
from orbitcam.rendering.look_state import LookState
from orbitcam.rendering.pose import Pose, project_pose

__version__ = "0.1.0"

__all__ = [
    "AutomaticRotation",
    "AutomaticRotationConfig",
    "Camera",
    "CameraRig",
    "ControllerConfig",
    "InputAccumulator",
    "LookAngles",
    "LookState",
    "OrbitController",
    "Pose",
    "ScrollEvent",
    "ScrollUnit",
    "TickInput",
    "orbit_step",
    "project_pose",
]
