"""Vector helpers shared by the camera math modules."""

from __future__ import annotations

import numpy as np

from .exceptions import DegenerateVectorError

# Lengths below this are treated as zero when normalizing.
EPSILON = 1e-9

WORLD_UP = np.array([0.0, 1.0, 0.0])


def as_vec3(value, name: str = "vector") -> np.ndarray:
    """Convert array-like input to a float64 (3,) array."""
    vec = np.asarray(value, dtype=np.float64).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"{name} must be (3,), got {vec.shape}")
    return vec.copy()


def try_normalize(v: np.ndarray) -> np.ndarray | None:
    """Return ``v`` scaled to unit length, or None if it has no length."""
    norm = float(np.linalg.norm(v))
    if norm < EPSILON or not np.isfinite(norm):
        return None
    return v / norm


def normalize(v: np.ndarray) -> np.ndarray:
    """
    Normalize a vector, raising on zero length.

    Raises
    ------
    DegenerateVectorError
        If ``v`` has (near) zero length
    """
    unit = try_normalize(v)
    if unit is None:
        raise DegenerateVectorError("Cannot normalize zero-length vector", v)
    return unit


def any_orthogonal(v: np.ndarray) -> np.ndarray:
    """Deterministic unit vector orthogonal to unit vector ``v``."""
    fallback = np.array([1.0, 0.0, 0.0]) if abs(v[0]) < 0.9 else np.array([0.0, 0.0, 1.0])
    return normalize(fallback - v * float(np.dot(fallback, v)))
