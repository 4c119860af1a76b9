"""Tests for the yaw/pitch direction encoding."""

import math

import numpy as np
import pytest

from orbitcam.rendering.look_angles import PITCH_LIMIT, LookAngles, reference_frame
from orbitcam.shared.exceptions import DegenerateVectorError


class TestFromVector:
    """Test decomposition of directions into yaw and pitch."""

    def test_reference_axes_with_y_up(self):
        """+X is yaw 0, -Z is yaw +pi/2, -X is yaw pi."""
        assert LookAngles.from_vector((1.0, 0.0, 0.0)).yaw == pytest.approx(0.0)
        assert LookAngles.from_vector((0.0, 0.0, -1.0)).yaw == pytest.approx(0.5 * math.pi)
        assert LookAngles.from_vector((0.0, 0.0, 1.0)).yaw == pytest.approx(-0.5 * math.pi)
        assert abs(LookAngles.from_vector((-1.0, 0.0, 0.0)).yaw) == pytest.approx(math.pi)

    def test_pitch_is_elevation(self):
        angles = LookAngles.from_vector((1.0, 1.0, 0.0))
        assert angles.pitch == pytest.approx(0.25 * math.pi)
        assert angles.yaw == pytest.approx(0.0)

    def test_length_does_not_matter(self):
        a = LookAngles.from_vector((0.3, -0.2, 0.9))
        b = LookAngles.from_vector((3.0, -2.0, 9.0))
        assert a.yaw == pytest.approx(b.yaw)
        assert a.pitch == pytest.approx(b.pitch)

    def test_zero_vector_raises(self):
        with pytest.raises(DegenerateVectorError):
            LookAngles.from_vector((0.0, 0.0, 0.0))

    def test_parallel_to_up_pins_yaw(self):
        """At the poles yaw is 0 and pitch saturates at the clamp."""
        up = LookAngles.from_vector((0.0, 2.0, 0.0))
        down = LookAngles.from_vector((0.0, -0.5, 0.0))
        assert up.yaw == 0.0
        assert up.pitch == pytest.approx(PITCH_LIMIT)
        assert down.yaw == 0.0
        assert down.pitch == pytest.approx(-PITCH_LIMIT)

    def test_custom_up_axis(self):
        """Angles are measured against the given up, not world Y."""
        up = np.array([0.0, 0.0, 1.0])
        angles = LookAngles.from_vector(up * 3.0, up=up)
        assert angles.pitch == pytest.approx(PITCH_LIMIT)
        level = LookAngles.from_vector((0.0, 1.0, 0.0), up=up)
        assert level.pitch == pytest.approx(0.0)


class TestRoundTrip:
    """unit_vector(from_vector(v)) is parallel to v away from the poles."""

    @pytest.mark.parametrize(
        "up",
        [(0.0, 1.0, 0.0), (0.0, 0.0, 1.0), (1.0, 1.0, 0.0), (0.3, -2.0, 0.5)],
    )
    def test_random_directions(self, rng, up):
        up_n = np.asarray(up) / np.linalg.norm(up)
        checked = 0
        for v in rng.normal(size=(200, 3)):
            direction = v / np.linalg.norm(v)
            if abs(np.dot(direction, up_n)) > math.sin(PITCH_LIMIT):
                continue
            result = LookAngles.from_vector(v, up=up).unit_vector()
            np.testing.assert_allclose(result, direction, atol=1e-9)
            checked += 1
        assert checked > 150

    def test_unit_vector_is_unit(self):
        angles = LookAngles(yaw=1.3, pitch=-0.7)
        assert np.linalg.norm(angles.unit_vector()) == pytest.approx(1.0)

    def test_reference_frame_is_orthonormal(self):
        up, forward, side = reference_frame((1.0, 2.0, 3.0))
        basis = np.column_stack([forward, up, side])
        np.testing.assert_allclose(basis.T @ basis, np.eye(3), atol=1e-12)


class TestIncrements:
    """Test wrapping of yaw and clamping of pitch."""

    def test_yaw_full_turn_returns_to_start(self):
        angles = LookAngles(yaw=0.3, pitch=0.2)
        angles.add_yaw(2.0 * math.pi)
        assert angles.yaw == pytest.approx(0.3, abs=1e-12)

    def test_negative_yaw_full_turn_keeps_direction(self):
        angles = LookAngles(yaw=-0.3, pitch=0.2)
        before = angles.unit_vector()
        angles.add_yaw(2.0 * math.pi)
        np.testing.assert_allclose(angles.unit_vector(), before, atol=1e-12)

    @pytest.mark.parametrize("yaw", [7.0, -7.0, 100.0, -100.0, 2.0 * math.pi])
    def test_yaw_stays_in_open_range(self, yaw):
        angles = LookAngles(yaw=yaw)
        assert -2.0 * math.pi < angles.yaw < 2.0 * math.pi
        assert math.cos(angles.yaw) == pytest.approx(math.cos(yaw))
        assert math.sin(angles.yaw) == pytest.approx(math.sin(yaw))

    def test_pitch_saturates_positive(self):
        angles = LookAngles()
        for _ in range(20):
            angles.add_pitch(0.5)
            assert angles.pitch <= PITCH_LIMIT
        assert angles.pitch == pytest.approx(0.5 * math.pi - 0.01)

    def test_pitch_saturates_negative(self):
        angles = LookAngles()
        for _ in range(20):
            angles.add_pitch(-10.0)
            assert angles.pitch >= -PITCH_LIMIT
        assert angles.pitch == pytest.approx(-0.5 * math.pi + 0.01)

    def test_pitch_does_not_flip_over_the_pole(self):
        """Saturated pitch keeps the horizontal heading."""
        angles = LookAngles(yaw=0.4, pitch=0.0)
        heading = angles.unit_vector()
        angles.add_pitch(3.0)
        tilted = angles.unit_vector()
        assert tilted[0] * heading[0] > 0
        assert tilted[2] * heading[2] > 0
