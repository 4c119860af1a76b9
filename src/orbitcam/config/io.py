"""
Camera preset import/export.

Presets are YAML files holding every camera of a rig (eye, target, up,
controller tuning, markers) plus the automatic rotation settings. Vectors
are flattened into ``_x/_y/_z`` scalar fields so the files stay readable
and editable by hand:

    version: 1
    automatic_rotation:
      enabled: false
      sensitivity: 1.0
      fixed_step: null
    cameras:
    - name: main
      eye_x: 0.0
      eye_y: 0.0
      eye_z: 5.0
      ...
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from orbitcam.config.settings import AutomaticRotationConfig, ControllerConfig
from orbitcam.control.rig import Camera, CameraRig
from orbitcam.rendering.look_state import LookState
from orbitcam.shared.exceptions import CameraSelectionError, ConfigError, PresetError

logger = logging.getLogger(__name__)

PRESET_VERSION = 1

_VECTOR_KEYS = ("eye", "target", "up")
_AXES = ("x", "y", "z")
_CAMERA_KEYS = {"name", "controllable", "auto_rotate", "controller", *_VECTOR_KEYS}


def _flatten_vectors(data: dict[str, Any]) -> dict[str, Any]:
    """
    Replace 3-vector entries with per-axis scalar fields.

    Converts ``eye: [x, y, z]`` into ``eye_x``, ``eye_y``, ``eye_z``; other
    entries are copied unchanged.
    """
    result: dict[str, Any] = {}
    for key, value in data.items():
        if key in _VECTOR_KEYS and isinstance(value, (list, tuple)) and len(value) == 3:
            for axis, component in zip(_AXES, value):
                result[f"{key}_{axis}"] = float(component)
        else:
            result[key] = value
    return result


def _unflatten_vectors(data: dict[str, Any]) -> dict[str, Any]:
    """Inverse of :func:`_flatten_vectors`; partial vectors are an error."""
    result = dict(data)
    for key in _VECTOR_KEYS:
        parts = [f"{key}_{axis}" for axis in _AXES]
        present = [p for p in parts if p in result]
        if not present:
            continue
        if len(present) != 3:
            raise ConfigError(f"Incomplete vector, expected {', '.join(parts)}", key)
        result[key] = [float(result.pop(p)) for p in parts]
    return result


def camera_to_dict(camera: Camera) -> dict[str, Any]:
    """Flattened preset entry for one camera."""
    entry: dict[str, Any] = {"name": camera.name}
    entry.update(camera.look_state.to_dict())
    entry["controllable"] = camera.controllable
    entry["auto_rotate"] = camera.auto_rotate
    entry["controller"] = camera.controller.to_dict()
    return _flatten_vectors(entry)


def camera_from_dict(entry: dict[str, Any]) -> Camera:
    """Build a camera from a (flattened) preset entry."""
    data = _unflatten_vectors(entry)
    if "name" not in data:
        raise ConfigError("Camera entry has no name", "name")
    unknown = sorted(set(data) - _CAMERA_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown keys of camera {data['name']!r}: {', '.join(unknown)}")
    try:
        look_state = LookState.from_dict(data)
    except ValueError as e:
        raise ConfigError(str(e), "look_state") from e
    return Camera(
        name=str(data["name"]),
        look_state=look_state,
        controller=ControllerConfig.from_dict(data.get("controller") or {}),
        controllable=bool(data.get("controllable", True)),
        auto_rotate=bool(data.get("auto_rotate", False)),
    )


def export_preset(
    rig: CameraRig,
    output_path: Path | str,
) -> None:
    """
    Write every camera of ``rig`` and its automatic rotation settings.

    Parameters
    ----------
    rig : CameraRig
        Rig to export
    output_path : Path | str
        Destination YAML file; parent directories are created

    Raises
    ------
    PresetError
        If the file cannot be written
    """
    output_path = Path(output_path)
    export_data = {
        "version": PRESET_VERSION,
        "automatic_rotation": rig.automatic_rotation.config.to_dict(),
        "cameras": [camera_to_dict(camera) for camera in rig.cameras],
    }

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            yaml.safe_dump(export_data, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise PresetError("Failed to write preset", str(output_path), cause=e) from e

    logger.info(f"Exported {len(export_data['cameras'])} camera(s) to {output_path}")


def read_preset(input_path: Path | str) -> tuple[list[Camera], AutomaticRotationConfig]:
    """
    Parse a preset file.

    Returns
    -------
    tuple[list[Camera], AutomaticRotationConfig]
        Cameras in file order and the automatic rotation settings

    Raises
    ------
    PresetError
        If the file is missing, is not valid YAML, or has invalid content
    """
    input_path = Path(input_path)
    if not input_path.exists():
        raise PresetError("Preset file not found", str(input_path))

    try:
        with open(input_path, "r") as f:
            import_data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise PresetError("Failed to read preset", str(input_path), cause=e) from e

    if not isinstance(import_data, dict):
        raise PresetError("Empty or invalid preset file", str(input_path))

    version = import_data.get("version", PRESET_VERSION)
    if version != PRESET_VERSION:
        logger.warning(f"Preset version {version} differs from {PRESET_VERSION}, trying anyway")

    try:
        automatic_rotation = AutomaticRotationConfig.from_dict(
            import_data.get("automatic_rotation") or {}
        )
        cameras = [camera_from_dict(entry) for entry in import_data.get("cameras") or []]
    except (ConfigError, TypeError, ValueError) as e:
        raise PresetError(f"Invalid preset content: {e}", str(input_path), cause=e) from e

    logger.info(f"Imported {len(cameras)} camera(s) from {input_path}")
    return cameras, automatic_rotation


def load_rig(input_path: Path | str) -> CameraRig:
    """Create a rig populated from a preset file."""
    cameras, automatic_rotation = read_preset(input_path)
    rig = CameraRig(automatic_rotation=automatic_rotation)
    try:
        for camera in cameras:
            rig.add(camera)
    except CameraSelectionError as e:
        raise PresetError(str(e), str(input_path), cause=e) from e
    return rig
