"""Tests for configuration dataclasses."""

import pytest

from orbitcam.config.settings import AutomaticRotationConfig, ControllerConfig
from orbitcam.shared.exceptions import ConfigError


class TestControllerConfig:
    """Test validation and serialization of controller tuning."""

    def test_defaults(self):
        config = ControllerConfig()
        assert config.mouse_rotate_sensitivity == (0.08, 0.08)
        assert config.mouse_translate_sensitivity == (0.1, 0.1)
        assert config.mouse_wheel_zoom_sensitivity == 0.2
        assert config.pixels_per_line == 53.0
        assert config.max_cursor_delta is None

    def test_scalar_sensitivity_is_splatted(self):
        config = ControllerConfig(mouse_rotate_sensitivity=0.5)
        assert config.mouse_rotate_sensitivity == (0.5, 0.5)

    def test_list_sensitivity_becomes_tuple(self):
        config = ControllerConfig(mouse_translate_sensitivity=[1, 2])
        assert config.mouse_translate_sensitivity == (1.0, 2.0)

    @pytest.mark.parametrize(
        "kwargs, field_name",
        [
            ({"pixels_per_line": 0.0}, "pixels_per_line"),
            ({"max_cursor_delta": -1.0}, "max_cursor_delta"),
            ({"min_radius": 2.0, "max_radius": 1.0}, "min_radius"),
            ({"mouse_rotate_sensitivity": (1.0, 2.0, 3.0)}, "mouse_rotate_sensitivity"),
        ],
    )
    def test_invalid_values(self, kwargs, field_name):
        with pytest.raises(ConfigError) as excinfo:
            ControllerConfig(**kwargs)
        assert excinfo.value.field_name == field_name

    def test_dict_round_trip(self):
        config = ControllerConfig(mouse_rotate_sensitivity=(0.1, 0.2), max_cursor_delta=50.0)
        data = config.to_dict()
        assert data["mouse_rotate_sensitivity"] == [0.1, 0.2]
        assert ControllerConfig.from_dict(data) == config

    def test_unknown_keys_warn(self, caplog):
        config = ControllerConfig.from_dict({"pixels_per_line": 40.0, "wheel_speed": 3})
        assert config.pixels_per_line == 40.0
        assert "wheel_speed" in caplog.text


class TestAutomaticRotationConfig:
    """Test the automatic rotation switch."""

    def test_defaults(self):
        config = AutomaticRotationConfig()
        assert config.enabled is False
        assert config.sensitivity == 1.0
        assert config.fixed_step is None

    def test_invalid_fixed_step(self):
        with pytest.raises(ConfigError):
            AutomaticRotationConfig(fixed_step=0.0)
