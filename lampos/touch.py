"""Capacitive touch sensing with smoothing and hysteresis."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from .filters import FilterOnePole, FilterType
from .timing import Clock, Stopwatch

log = logging.getLogger(__name__)

NOISE_FLOOR = 10
_REPORT_MARGIN = 100.0


class TouchState(Enum):
    """What happened to the touch since the last poll."""

    NONE = "none"
    TOUCH_DOWN = "down"
    TOUCH_ACTIVE = "active"
    TOUCH_UP = "up"


class TouchInput:
    """Reads a touch sensor and reports presses and how long they last.

    ``sensor`` returns a raw reading; the reading at ``setup`` is the bias that
    later readings are measured against.
    """

    def __init__(
        self,
        trigger_on: int,
        trigger_off: int,
        sensor: Callable[[], float],
        clock: Clock | None = None,
    ) -> None:
        self.trigger_on = trigger_on
        self.trigger_off = trigger_off
        self._sensor = sensor
        self._clock = clock
        self._bias = 0.0
        self._is_touching = False
        self._touch_amount = 0.0
        self._prev_touch_amount = 0.0
        self._time_elapsed = Stopwatch(clock)
        self._make_filters()

    def _make_filters(self) -> None:
        self._filter1 = FilterOnePole(FilterType.LOWPASS, 1.0, clock=self._clock)
        self._filter2 = FilterOnePole(FilterType.LOWPASS, 1.0, clock=self._clock)

    def setup(self) -> None:
        """Reset the filters and take the current reading as the bias."""
        self._make_filters()
        self._is_touching = False
        self._prev_touch_amount = 0.0
        self._bias = float(self._sensor())
        log.debug("touch bias %s", self._bias)

    def poll(self) -> tuple[TouchState, float]:
        """Read the sensor; returns the state change and, where relevant, milliseconds."""
        was_touching = self._is_touching

        sens = int(self._sensor() - self._bias)
        filtered = self._filter2.input(self._filter1.input(sens))
        if filtered < NOISE_FLOOR:
            filtered = 0.0

        if filtered > self.trigger_on:
            self._is_touching = True
        if filtered < self.trigger_off:
            self._is_touching = False
        self._touch_amount = filtered

        if abs(self._touch_amount - self._prev_touch_amount) > _REPORT_MARGIN:
            self._prev_touch_amount = self._touch_amount
            log.debug("touch amount %s (raw %s)", self._touch_amount, sens)

        if self._is_touching != was_touching:
            if self._is_touching:
                result = (TouchState.TOUCH_DOWN, 0.0)
            else:
                result = (TouchState.TOUCH_UP, self._time_elapsed.elapsed())
            self._time_elapsed.reset()
            return result
        if self._is_touching:
            return TouchState.TOUCH_ACTIVE, self._time_elapsed.elapsed()
        return TouchState.NONE, 0.0

    @property
    def touch_amount(self) -> float:
        return self._touch_amount

    @property
    def bias(self) -> float:
        return self._bias