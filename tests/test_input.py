"""Tests for per-tick input accumulation."""

import numpy as np
import pytest

from orbitcam.interaction.input import (
    InputAccumulator,
    InputBindings,
    MotionEvent,
    ScrollEvent,
    ScrollUnit,
    TickInput,
)


class TestInputAccumulator:
    """Test folding raw events into TickInput."""

    def test_motion_is_summed(self):
        inputs = InputAccumulator()
        inputs.push_motion(3.0, -1.0)
        inputs.push(MotionEvent(2.0, 4.0))
        tick = inputs.drain()
        np.testing.assert_array_equal(tick.cursor_delta, [5.0, 3.0])

    def test_scroll_keeps_order_and_units(self):
        inputs = InputAccumulator()
        inputs.push_scroll(1.0)
        inputs.push(ScrollEvent(26.5, ScrollUnit.PIXEL))
        tick = inputs.drain()
        assert [e.lines(53.0) for e in tick.scroll] == [1.0, 0.5]

    def test_drain_resets_buffers_but_keeps_held_inputs(self):
        inputs = InputAccumulator()
        inputs.press_button("Middle")
        inputs.push_motion(1.0, 1.0)
        inputs.push_scroll(2.0)
        first = inputs.drain()
        second = inputs.drain()

        assert first.rotate_active and second.rotate_active
        np.testing.assert_array_equal(second.cursor_delta, [0.0, 0.0])
        assert second.scroll == []
        assert len(first.scroll) == 1

    def test_default_bindings(self):
        inputs = InputAccumulator()
        inputs.press_key("ControlLeft")
        assert inputs.rotate_active and not inputs.pan_active
        inputs.release_key("ControlLeft")
        inputs.press_button("Right")
        assert inputs.pan_active and not inputs.rotate_active
        inputs.release_button("Right")
        assert inputs.drain().is_idle

    def test_custom_bindings(self):
        inputs = InputAccumulator(InputBindings(rotate_keys=frozenset({"AltLeft"}), pan_keys=frozenset({"ShiftLeft"})))
        inputs.press_key("ControlLeft")
        assert not inputs.rotate_active
        inputs.press_key("ShiftLeft")
        assert inputs.pan_active

    def test_unsupported_event(self):
        with pytest.raises(TypeError):
            InputAccumulator().push("wheel")


class TestTickInput:
    """Test the TickInput container."""

    def test_default_is_idle(self, idle_input):
        assert idle_input.is_idle

    def test_motion_is_not_idle(self):
        assert not TickInput(cursor_delta=(0.0, 1.0)).is_idle
        assert not TickInput(scroll=[ScrollEvent(0.5)]).is_idle

    def test_cursor_delta_shape(self):
        with pytest.raises(ValueError):
            TickInput(cursor_delta=(1.0, 2.0, 3.0))
