"""Time-aware smoothing filters: one- and two-pole low/high-pass, derivative, running statistics.

Every filter reads a millisecond clock so that its response depends on the real
time between calls to ``input`` rather than on how often it is called.
"""

from __future__ import annotations

import math
from enum import Enum

from .timing import Clock, monotonic_ms

_US_PER_MS = 1000.0
_US_PER_S = 1e6


class FilterType(Enum):
    """What a one-pole filter reports as its output."""

    HIGHPASS = "highpass"
    LOWPASS = "lowpass"
    INTEGRATOR = "integrator"
    DIFFERENTIATOR = "differentiator"


class FilterOnePole:
    """A recursive single-pole filter whose time constant is set in seconds."""

    def __init__(
        self,
        filter_type: FilterType = FilterType.LOWPASS,
        frequency: float = 1.0,
        initial_value: float = 0.0,
        clock: Clock | None = None,
    ) -> None:
        self._clock = clock or monotonic_ms
        self.tau_us = 0.0
        self.elapsed_us = 0.0
        self.set_filter(filter_type, frequency, initial_value)

    def _now_us(self) -> float:
        return self._clock() * _US_PER_MS

    def set_filter(self, filter_type: FilterType, frequency: float, initial_value: float) -> None:
        """Set the filter's kind, cut-off frequency (Hz) and state."""
        self.filter_type = FilterType(filter_type)
        self.set_frequency(frequency)
        self.y = initial_value
        self.y_last = initial_value
        self.x = initial_value
        self._last_us = self._now_us()

    def set_frequency(self, frequency: float) -> None:
        """Set the cut-off frequency in Hz (tau = 1 / omega)."""
        omega = math.tau * frequency
        self.set_tau(1.0 / omega if omega else math.inf)

    def set_tau(self, tau: float) -> None:
        """Set the time constant in seconds."""
        self.tau_us = tau * _US_PER_S

    def _amp_factor(self) -> float:
        if self.elapsed_us == 0:
            return 1.0
        if self.tau_us == 0:
            return 0.0
        try:
            return math.exp(-self.elapsed_us / self.tau_us)
        except OverflowError:
            return math.inf

    def input(self, value: float) -> float:
        """Feed a new sample and return the filter's output."""
        now = self._now_us()
        self.elapsed_us = now - self._last_us
        self._last_us = now

        self.y_last = self.y
        self.x = value
        amp = self._amp_factor()
        self.y = (1.0 - amp) * self.x + amp * self.y_last
        return self.output()

    def output(self) -> float:
        """The current output, shaped by the filter type."""
        tau_s = self.tau_us / _US_PER_S
        if self.filter_type is FilterType.LOWPASS:
            return self.y
        if self.filter_type is FilterType.INTEGRATOR:
            return self.y * tau_s
        if self.filter_type is FilterType.HIGHPASS:
            return self.x - self.y
        return (self.x - self.y) / tau_s

    def set_to_new_value(self, value: float) -> None:
        """Reset the filter so that it holds ``value`` with no history."""
        self.y = self.y_last = self.x = value


class FilterOnePoleCascade:
    """Two low-pass poles in series, set by their 10%-90% rise time in seconds."""

    TAU_SCALE = 3.36

    def __init__(
        self,
        rise_time: float = 1.0,
        initial_value: float = 0.0,
        clock: Clock | None = None,
    ) -> None:
        self.pole1 = FilterOnePole(clock=clock)
        self.pole2 = FilterOnePole(clock=clock)
        self.set_rise_time(rise_time)
        self.set_to_new_value(initial_value)

    def set_rise_time(self, rise_time: float) -> None:
        tau = rise_time / self.TAU_SCALE
        self.pole1.set_tau(tau)
        self.pole2.set_tau(tau)

    def set_to_new_value(self, value: float) -> None:
        """Clear the history of both poles."""
        self.pole1.set_to_new_value(value)
        self.pole2.set_to_new_value(value)

    def input(self, value: float) -> float:
        self.pole2.input(self.pole1.input(value))
        return self.output()

    def output(self) -> float:
        return self.pole2.output()


class OscillatorType(Enum):
    """Low-pass responses a two-pole filter can be tuned to."""

    LOWPASS_BESSEL = "bessel"
    LOWPASS_BUTTERWORTH = "butterworth"


class FilterTwoPole:
    """A driven, damped harmonic oscillator usable as a two-pole low-pass filter.

    A constant drive ``F`` makes the oscillator come to rest at position ``F``.
    """

    Q_MIN = 1e-3
    Q_MAX = 1e3

    def __init__(
        self,
        frequency0: float = 1.0,
        quality_factor: float = 1.0,
        x_init: float = 0.0,
        clock: Clock | None = None,
    ) -> None:
        self._clock = clock or monotonic_ms
        self.x = x_init
        self.v_prev = 0.0
        self.v_avg = 0.0
        self.f_prev = 0.0
        self.is_highpass = False
        self.q = 1.0
        self.w0 = 0.0
        self.set_q(quality_factor)
        self.set_frequency0(frequency0)
        self._last_us = self._now_us()

    def _now_us(self) -> float:
        return self._clock() * _US_PER_MS

    def set_q(self, quality_factor: float) -> None:
        """Set the quality factor, kept within a stable range."""
        self.q = min(max(quality_factor, self.Q_MIN), self.Q_MAX)

    def set_frequency0(self, frequency: float) -> None:
        """Set the undamped resonance frequency in Hz."""
        self.w0 = math.tau * abs(frequency)

    def set_as_filter(
        self,
        oscillator_type: OscillatorType,
        frequency_3db: float,
        initial_value: float = 0.0,
    ) -> None:
        """Tune the oscillator as a Bessel or Butterworth low-pass filter."""
        self.is_highpass = False
        self.x = initial_value
        oscillator_type = OscillatorType(oscillator_type)
        if oscillator_type is OscillatorType.LOWPASS_BESSEL:
            self.set_frequency0(frequency_3db * 1.28)
            self.set_q(0.5774)
        elif oscillator_type is OscillatorType.LOWPASS_BUTTERWORTH:
            self.set_frequency0(frequency_3db)
            self.set_q(0.7071)

    def input(self, drive: float = 0.0) -> float:
        """Step the oscillator under ``drive`` and return its position."""
        self.f_prev = drive
        now = self._now_us()
        dt = (now - self._last_us) / _US_PER_S
        self._last_us = now

        # Long pauses would make the integration blow up, so they are capped.
        max_dt = 1.0 / self.w0 if self.w0 else math.inf
        dt = min(max(dt, 0.0), max_dt)

        w0_sq = self.w0 * self.w0
        acceleration = w0_sq * drive - self.w0 / self.q * self.v_prev - w0_sq * self.x
        velocity = self.v_prev + acceleration * dt
        self.v_avg = 0.5 * (velocity + self.v_prev)
        self.x += self.v_avg * dt
        self.v_prev = velocity
        return self.output()

    def output(self) -> float:
        return self.x

    def max_amplitude(self) -> float:
        """Amplitude the oscillator's current energy corresponds to."""
        energy = 0.5 * self.w0 * self.x ** 2 + 0.5 * self.v_prev ** 2 / self.w0
        return math.sqrt(2.0 * energy / self.w0)


class FilterDerivative:
    """Rate of change of the input, per second."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or monotonic_ms
        self._last_ms = self._clock()
        self.last_input = 0.0
        self.derivative = 0.0

    def input(self, value: float) -> float:
        now = self._clock()
        dt = (now - self._last_ms) / 1000.0
        self._last_ms = now
        delta = value - self.last_input
        if dt:
            self.derivative = delta / dt
        else:
            self.derivative = math.copysign(math.inf, delta) if delta else math.nan
        self.last_input = value
        return self.output()

    def output(self) -> float:
        return self.derivative


class RunningStatistics:
    """Running mean and spread, smoothed over a time window in seconds."""

    MAX_CV = 1e3

    def __init__(self, clock: Clock | None = None) -> None:
        self.average_secs = 1.0
        self.average_value = FilterOnePoleCascade(clock=clock)
        self.average_square_value = FilterOnePoleCascade(clock=clock)
        self.set_window_secs(1.0)
        self.set_initial_value(0.0)

    def set_window_secs(self, window_secs: float) -> None:
        self.average_secs = window_secs
        self.average_value.set_rise_time(window_secs)
        self.average_square_value.set_rise_time(window_secs)

    def set_initial_value(self, mean: float, sigma: float = 0.0) -> None:
        self.average_value.set_to_new_value(mean)
        self.average_square_value.set_to_new_value(mean * mean + sigma * sigma)

    def input(self, value: float) -> None:
        self.average_value.input(value)
        self.average_square_value.input(value * value)

    def mean(self) -> float:
        return self.average_value.output()

    def variance(self) -> float:
        mean = self.average_value.output()
        # Smoothing can push this slightly below zero.
        return max(self.average_square_value.output() - mean * mean, 0.0)

    def sigma(self) -> float:
        return math.sqrt(self.variance())

    def cv(self) -> float:
        """Coefficient of variation; a large constant when the mean is zero."""
        mean = self.mean()
        if mean == 0:
            return self.MAX_CV
        return self.sigma() / mean