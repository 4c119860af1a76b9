"""
Quaternion utilities for camera orientation.

All quaternions use wxyz format (w, x, y, z): w is the scalar component,
(x, y, z) is the vector component. Rotations are right-handed.
"""

from __future__ import annotations

import numpy as np

IDENTITY_QUAT = np.array([1.0, 0.0, 0.0, 0.0])


def quat_normalize(q: np.ndarray) -> np.ndarray:
    """
    Normalize quaternion to unit length.

    A (near) zero quaternion maps to the identity rotation.

    Parameters
    ----------
    q : np.ndarray
        Quaternion (wxyz format)

    Returns
    -------
    np.ndarray
        Unit quaternion (wxyz format)
    """
    q = np.asarray(q, dtype=np.float64)
    norm = np.linalg.norm(q)
    if norm < 1e-12:
        return IDENTITY_QUAT.copy()
    return q / norm


def quat_from_axis_angle(axis: np.ndarray, angle: float) -> np.ndarray:
    """
    Create quaternion rotating ``angle`` radians about ``axis``.

    Parameters
    ----------
    axis : np.ndarray
        Rotation axis (3,), normalized here. A zero axis gives identity.
    angle : float
        Rotation angle in radians

    Returns
    -------
    np.ndarray
        Rotation quaternion (wxyz format)
    """
    axis = np.asarray(axis, dtype=np.float64)
    axis_norm = np.linalg.norm(axis)
    if axis_norm < 1e-12:
        return IDENTITY_QUAT.copy()

    half = 0.5 * angle
    xyz = axis / axis_norm * np.sin(half)
    return np.array([np.cos(half), xyz[0], xyz[1], xyz[2]])


def quat_rotate_vector(q: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Rotate 3-vector ``v`` by unit quaternion ``q``."""
    w = q[0]
    u = np.asarray(q[1:], dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)
    # v' = v + 2w(u x v) + 2u x (u x v)
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)


def quat_to_rotation_matrix(q: np.ndarray) -> np.ndarray:
    """
    Convert quaternion to 3x3 rotation matrix.

    Parameters
    ----------
    q : np.ndarray
        Quaternion (wxyz format), normalized here

    Returns
    -------
    np.ndarray
        3x3 rotation matrix whose columns are the rotated basis axes
    """
    w, x, y, z = quat_normalize(q)

    return np.array(
        [
            [1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - w * z), 2.0 * (x * z + w * y)],
            [2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - w * x)],
            [2.0 * (x * z - w * y), 2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)],
        ]
    )


def rotation_matrix_to_quat(R: np.ndarray) -> np.ndarray:
    """
    Convert 3x3 rotation matrix to quaternion.

    Uses Shepperd's method: pick the largest of the four squared components
    as pivot so the division is always well conditioned.

    Parameters
    ----------
    R : np.ndarray
        3x3 rotation matrix

    Returns
    -------
    np.ndarray
        Unit quaternion (wxyz format) with non-negative w
    """
    R = np.asarray(R, dtype=np.float64)
    trace = np.trace(R)
    candidates = np.array([trace, R[0, 0], R[1, 1], R[2, 2]])
    pivot = int(np.argmax(candidates))

    if pivot == 0:
        s = 2.0 * np.sqrt(1.0 + trace)
        q = np.array(
            [0.25 * s, (R[2, 1] - R[1, 2]) / s, (R[0, 2] - R[2, 0]) / s, (R[1, 0] - R[0, 1]) / s]
        )
    elif pivot == 1:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        q = np.array(
            [(R[2, 1] - R[1, 2]) / s, 0.25 * s, (R[0, 1] + R[1, 0]) / s, (R[0, 2] + R[2, 0]) / s]
        )
    elif pivot == 2:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        q = np.array(
            [(R[0, 2] - R[2, 0]) / s, (R[0, 1] + R[1, 0]) / s, 0.25 * s, (R[1, 2] + R[2, 1]) / s]
        )
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        q = np.array(
            [(R[1, 0] - R[0, 1]) / s, (R[0, 2] + R[2, 0]) / s, (R[1, 2] + R[2, 1]) / s, 0.25 * s]
        )

    q = quat_normalize(q)
    if q[0] < 0.0:
        q = -q
    return q
