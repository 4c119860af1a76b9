"""
Per-tick input accumulation.

The host feeds raw events (pointer motion, wheel, key and button presses)
as they arrive; once per tick :meth:`InputAccumulator.drain` folds them into
a :class:`TickInput`, the only input the controllers ever see.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class ScrollUnit(Enum):
    """Unit of a wheel event."""

    LINE = "line"
    PIXEL = "pixel"


@dataclass(frozen=True)
class MotionEvent:
    """Relative pointer motion in pixels."""

    dx: float
    dy: float


@dataclass(frozen=True)
class ScrollEvent:
    """Wheel movement; positive amounts zoom in."""

    amount: float
    unit: ScrollUnit = ScrollUnit.LINE

    def lines(self, pixels_per_line: float) -> float:
        """Amount expressed in lines."""
        if self.unit is ScrollUnit.PIXEL:
            return self.amount / pixels_per_line
        return self.amount


@dataclass(frozen=True)
class InputBindings:
    """Which held inputs trigger rotating and panning.

    Names are free-form strings chosen by the host (e.g. key codes).
    """

    rotate_keys: frozenset[str] = frozenset({"ControlLeft"})
    rotate_buttons: frozenset[str] = frozenset({"Middle"})
    pan_keys: frozenset[str] = frozenset()
    pan_buttons: frozenset[str] = frozenset({"Right"})


@dataclass
class TickInput:
    """
    Everything the orbit controller consumes for one tick.

    Attributes
    ----------
    cursor_delta : np.ndarray
        (2,) summed pointer motion since the previous tick
    scroll : list[ScrollEvent]
        Wheel events since the previous tick, in arrival order
    rotate_active : bool
        Rotate trigger held
    pan_active : bool
        Pan trigger held
    """

    cursor_delta: np.ndarray = field(default_factory=lambda: np.zeros(2))
    scroll: list[ScrollEvent] = field(default_factory=list)
    rotate_active: bool = False
    pan_active: bool = False

    def __post_init__(self):
        self.cursor_delta = np.asarray(self.cursor_delta, dtype=np.float64).reshape(2)

    @property
    def is_idle(self) -> bool:
        """True if this tick carries no motion, scroll or held trigger."""
        return (
            not self.rotate_active
            and not self.pan_active
            and not self.scroll
            and not np.any(self.cursor_delta)
        )


class InputAccumulator:
    """
    Collects raw input events between ticks.

    Motion and scroll are per-tick buffers; pressed keys and buttons persist
    until released.
    """

    def __init__(self, bindings: InputBindings | None = None):
        self.bindings = bindings or InputBindings()
        self._motion = np.zeros(2)
        self._scroll: list[ScrollEvent] = []
        self._keys: set[str] = set()
        self._buttons: set[str] = set()

    def push_motion(self, dx: float, dy: float) -> None:
        self._motion += (dx, dy)

    def push_scroll(self, amount: float, unit: ScrollUnit = ScrollUnit.LINE) -> None:
        self._scroll.append(ScrollEvent(float(amount), unit))

    def push(self, event: MotionEvent | ScrollEvent) -> None:
        """Record a motion or scroll event object."""
        if isinstance(event, MotionEvent):
            self.push_motion(event.dx, event.dy)
        elif isinstance(event, ScrollEvent):
            self._scroll.append(event)
        else:
            raise TypeError(f"Unsupported input event: {type(event).__name__}")

    def press_key(self, key: str) -> None:
        self._keys.add(key)

    def release_key(self, key: str) -> None:
        self._keys.discard(key)

    def press_button(self, button: str) -> None:
        self._buttons.add(button)

    def release_button(self, button: str) -> None:
        self._buttons.discard(button)

    @property
    def rotate_active(self) -> bool:
        b = self.bindings
        return bool(self._keys & b.rotate_keys or self._buttons & b.rotate_buttons)

    @property
    def pan_active(self) -> bool:
        b = self.bindings
        return bool(self._keys & b.pan_keys or self._buttons & b.pan_buttons)

    def drain(self) -> TickInput:
        """Return this tick's input and reset the motion and scroll buffers."""
        tick = TickInput(
            cursor_delta=self._motion.copy(),
            scroll=list(self._scroll),
            rotate_active=self.rotate_active,
            pan_active=self.pan_active,
        )
        self._motion = np.zeros(2)
        self._scroll.clear()
        return tick
