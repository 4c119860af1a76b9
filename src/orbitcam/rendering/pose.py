"""
Renderer-facing camera pose derived from a LookState.

Convention: right-handed, the camera looks down its local -Z axis with +Y
as its local up (OpenGL style). Orientation is the camera-to-world rotation
as a wxyz quaternion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from orbitcam.shared.math import any_orthogonal, try_normalize

from .look_state import LookState
from .quaternion_utils import (
    IDENTITY_QUAT,
    quat_to_rotation_matrix,
    rotation_matrix_to_quat,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pose:
    """
    Camera position and orientation.

    Attributes
    ----------
    position : np.ndarray
        (3,) camera position in world coordinates
    orientation : np.ndarray
        (4,) camera-to-world rotation quaternion (wxyz)
    """

    position: np.ndarray
    orientation: np.ndarray

    @property
    def rotation_matrix(self) -> np.ndarray:
        """3x3 camera-to-world rotation."""
        return quat_to_rotation_matrix(self.orientation)

    @property
    def forward(self) -> np.ndarray:
        """Viewing direction (local -Z)."""
        return -self.rotation_matrix[:, 2]

    @property
    def right(self) -> np.ndarray:
        """Camera right direction (local +X)."""
        return self.rotation_matrix[:, 0]

    @property
    def up(self) -> np.ndarray:
        """Camera up direction (local +Y)."""
        return self.rotation_matrix[:, 1]

    def c2w(self) -> np.ndarray:
        """4x4 camera-to-world matrix."""
        c2w = np.eye(4)
        c2w[:3, :3] = self.rotation_matrix
        c2w[:3, 3] = self.position
        return c2w

    def view_matrix(self) -> np.ndarray:
        """4x4 world-to-camera matrix (inverse of :meth:`c2w`)."""
        R = self.rotation_matrix
        view = np.eye(4)
        view[:3, :3] = R.T
        view[:3, 3] = -R.T @ self.position
        return view

    def to_dict(self) -> dict[str, list[float]]:
        return {
            "position": [float(c) for c in self.position],
            "orientation": [float(c) for c in self.orientation],
        }


def look_at_rotation(forward: np.ndarray, up: np.ndarray) -> np.ndarray:
    """
    Camera-to-world rotation looking along ``forward`` with ``up`` as roll
    reference.

    Parameters
    ----------
    forward : np.ndarray
        Unit viewing direction
    up : np.ndarray
        Up reference, any non-zero length

    Returns
    -------
    np.ndarray
        3x3 rotation matrix with columns (right, up, back)
    """
    back = -forward
    right = try_normalize(np.cross(up, back))
    if right is None:
        # up is parallel to the view ray; any roll is as good as another.
        right = any_orthogonal(back)
    true_up = np.cross(back, right)
    return np.column_stack([right, true_up, back])


def project_pose(state: LookState) -> Pose:
    """
    Convert a LookState into a renderer pose.

    ``position`` is the eye; the orientation points the camera's forward axis
    at the target. A state with ``eye == target`` has no view direction and
    yields the identity orientation.
    """
    position = state.eye.copy()
    forward = state.look_direction()
    if forward is None:
        logger.warning("Eye coincides with target, using identity orientation")
        return Pose(position=position, orientation=IDENTITY_QUAT.copy())

    R = look_at_rotation(forward, state.up)
    return Pose(position=position, orientation=rotation_matrix_to_quat(R))
