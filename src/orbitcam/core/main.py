"""
orbitcam simulator - command line entry point.

Runs a headless camera rig for a number of ticks with scripted input and
prints one JSON line per tick with the pose of every camera. Useful for
checking presets and sensitivities without a renderer.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import tyro

from orbitcam.config.io import export_preset, load_rig
from orbitcam.config.settings import AutomaticRotationConfig
from orbitcam.control.rig import Camera, CameraRig
from orbitcam.interaction.input import InputAccumulator, ScrollUnit
from orbitcam.rendering.look_state import LookState
from orbitcam.shared.exceptions import OrbitCamError

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """
    Setup logging configuration.

    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_default_rig(auto_rotate: float | None) -> CameraRig:
    """Single camera at (0, 0, 5) looking at the origin."""
    automatic_rotation = AutomaticRotationConfig(
        enabled=auto_rotate is not None,
        sensitivity=auto_rotate if auto_rotate is not None else 1.0,
    )
    rig = CameraRig(automatic_rotation=automatic_rotation)
    rig.add(Camera(name="main", look_state=LookState(), auto_rotate=auto_rotate is not None))
    return rig


def main(
    preset: Annotated[Path | None, tyro.conf.Positional] = None,
    ticks: int = 10,
    dt: float = 1.0 / 60.0,
    drag: tuple[float, float] = (0.0, 0.0),
    rotate: bool = False,
    pan: bool = False,
    scroll: float = 0.0,
    scroll_pixels: bool = False,
    auto_rotate: float | None = None,
    camera: str | None = None,
    save: Path | None = None,
    log_level: str = "WARNING",
) -> int:
    """
    Simulate an orbit camera rig and print poses as JSON lines.

    Parameters
    ----------
    preset : Path | None
        YAML preset to load. Without it a single default camera is used.
    ticks : int
        Number of ticks to simulate
    dt : float
        Seconds per tick
    drag : tuple[float, float]
        Pointer motion (pixels) injected every tick
    rotate : bool
        Hold the rotate trigger (left Control)
    pan : bool
        Hold the pan trigger (right mouse button)
    scroll : float
        Wheel amount injected every tick (positive zooms in)
    scroll_pixels : bool
        Interpret ``scroll`` as pixels instead of lines
    auto_rotate : float | None
        Enable automatic rotation at this rate (rad/s). Overrides the preset.
    camera : str | None
        Name of the manually controlled camera
    save : Path | None
        Write the final rig state to this preset file
    log_level : str
        Logging level: DEBUG, INFO, WARNING, ERROR (default: WARNING)

    Examples
    --------
    Orbit the default camera:
        orbitcam-sim --ticks 30 --rotate --drag 40 0

    Idle rotation from a preset:
        orbitcam-sim presets/studio.yaml --auto-rotate 0.5 --ticks 120
    """
    setup_logging(log_level)

    try:
        if preset is not None:
            rig = load_rig(preset)
            if auto_rotate is not None:
                rig.automatic_rotation.config.enabled = True
                rig.automatic_rotation.config.sensitivity = auto_rotate
        else:
            rig = build_default_rig(auto_rotate)
        if camera is not None:
            rig.set_active(camera)
    except OrbitCamError as e:
        logger.error(str(e))
        return 1

    inputs = InputAccumulator()
    if rotate:
        inputs.press_key("ControlLeft")
    if pan:
        inputs.press_button("Right")

    unit = ScrollUnit.PIXEL if scroll_pixels else ScrollUnit.LINE
    for index in range(ticks):
        inputs.push_motion(*drag)
        if scroll:
            inputs.push_scroll(scroll, unit)
        moved = rig.tick(dt, inputs.drain())
        record = {
            "tick": index,
            "moved": moved,
            "poses": {name: pose.to_dict() for name, pose in rig.poses().items()},
        }
        print(json.dumps(record))

    if save is not None:
        try:
            export_preset(rig, save)
        except OrbitCamError as e:
            logger.error(str(e))
            return 1
    return 0


def cli() -> None:
    """Entry point for the installed script."""
    sys.exit(tyro.cli(main))


if __name__ == "__main__":
    cli()
