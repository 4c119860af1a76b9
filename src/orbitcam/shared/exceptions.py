"""
Custom exceptions for orbitcam.

This module provides domain-specific exceptions for better error handling
and clearer error messages throughout the camera controller.

Only programming errors and configuration problems raise. Conditions that
can happen during normal ticking (no controllable camera, a rotation that
would cross the pole) are recovered locally and logged instead.
"""

from __future__ import annotations


class OrbitCamError(Exception):
    """Base exception for all orbitcam errors."""

    pass


class DegenerateVectorError(OrbitCamError):
    """Raised when a direction is derived from a zero-length vector."""

    def __init__(self, message: str, vector: object = None):
        """
        Initialize DegenerateVectorError.

        Parameters
        ----------
        message : str
            Error message
        vector : object
            The offending vector, if available
        """
        self.vector = vector

        full_message = message
        if vector is not None:
            full_message = f"{full_message} (vector: {tuple(float(c) for c in vector)})"

        super().__init__(full_message)


class CameraSelectionError(OrbitCamError):
    """Raised when a camera is selected or registered by an invalid name."""

    def __init__(
        self,
        message: str,
        camera_name: str | None = None,
        available: list[str] | None = None,
    ):
        """
        Initialize CameraSelectionError.

        Parameters
        ----------
        message : str
            Error message
        camera_name : str | None
            Name that was requested
        available : list[str] | None
            Names of the registered cameras
        """
        self.camera_name = camera_name
        self.available = available

        full_message = message
        if camera_name:
            full_message = f"{full_message} (camera: {camera_name})"
        if available is not None:
            full_message = f"{full_message} (available: {', '.join(available) or 'none'})"

        super().__init__(full_message)


class ConfigError(OrbitCamError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        actual_value: object = None,
    ):
        """
        Initialize ConfigError.

        Parameters
        ----------
        message : str
            Error message
        field_name : str | None
            Name of the invalid config field
        actual_value : object
            Value that failed validation
        """
        self.field_name = field_name
        self.actual_value = actual_value

        full_message = message
        if field_name:
            full_message = f"{full_message} (field: {field_name})"
        if actual_value is not None:
            full_message = f"{full_message} (got: {actual_value!r})"

        super().__init__(full_message)


class PresetError(OrbitCamError):
    """Raised when a camera preset file cannot be read or written."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        *,
        cause: Exception | None = None,
    ):
        """
        Initialize PresetError.

        Parameters
        ----------
        message : str
            Error message
        path : str | None
            Path of the preset file
        cause : Exception | None
            Underlying exception
        """
        self.path = path
        self.cause = cause

        full_message = message
        if path:
            full_message = f"{full_message} (path: {path})"

        super().__init__(full_message)
        if cause is not None:
            self.__cause__ = cause
