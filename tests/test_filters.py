import math

import pytest

from lampos.filters import (
    FilterDerivative,
    FilterOnePole,
    FilterOnePoleCascade,
    FilterTwoPole,
    FilterType,
    OscillatorType,
    RunningStatistics,
)
from lampos.timing import ManualClock


@pytest.fixture
def clock():
    return ManualClock(0.0)


def test_one_pole_holds_initial_value(clock):
    f = FilterOnePole(FilterType.LOWPASS, 1.0, 42.0, clock)
    assert f.output() == 42.0


def test_one_pole_no_elapsed_time_keeps_output(clock):
    f = FilterOnePole(FilterType.LOWPASS, 1.0, 0.0, clock)
    assert f.input(100.0) == 0.0


def test_set_tau_converts_to_microseconds(clock):
    f = FilterOnePole(clock=clock)
    f.set_tau(2.0)
    assert f.tau_us == pytest.approx(2e6)


def test_lowpass_step_rises_monotonically_and_converges(clock):
    f = FilterOnePole(FilterType.LOWPASS, 1.0, 0.0, clock)
    previous = 0.0
    for _ in range(50):
        clock.advance(20)
        value = f.input(100.0)
        assert previous <= value <= 100.0
        previous = value
    assert previous > 0.0
    clock.advance(1e7)
    assert f.input(100.0) == pytest.approx(100.0)


def test_highpass_and_lowpass_sum_to_input(clock):
    lp = FilterOnePole(FilterType.LOWPASS, 0.5, 0.0, clock)
    hp = FilterOnePole(FilterType.HIGHPASS, 0.5, 0.0, clock)
    for value in (10.0, 30.0, -5.0, 7.5):
        clock.advance(100)
        assert lp.input(value) + hp.input(value) == pytest.approx(value)


def test_integrator_scales_by_tau(clock):
    lp = FilterOnePole(FilterType.LOWPASS, 2.0, 0.0, clock)
    integ = FilterOnePole(FilterType.INTEGRATOR, 2.0, 0.0, clock)
    clock.advance(50)
    low = lp.input(4.0)
    assert integ.input(4.0) == pytest.approx(low * integ.tau_us / 1e6)


def test_differentiator_is_highpass_over_tau(clock):
    hp = FilterOnePole(FilterType.HIGHPASS, 2.0, 0.0, clock)
    diff = FilterOnePole(FilterType.DIFFERENTIATOR, 2.0, 0.0, clock)
    clock.advance(50)
    high = hp.input(4.0)
    assert diff.input(4.0) == pytest.approx(high / (diff.tau_us / 1e6))


def test_set_to_new_value_resets_history(clock):
    f = FilterOnePole(FilterType.HIGHPASS, 1.0, 0.0, clock)
    clock.advance(10)
    f.input(50.0)
    f.set_to_new_value(7.0)
    assert (f.x, f.y, f.y_last) == (7.0, 7.0, 7.0)
    assert f.output() == 0.0


def test_cascade_reset_and_convergence(clock):
    c = FilterOnePoleCascade(1.0, 3.0, clock)
    assert c.output() == 3.0
    c.set_to_new_value(0.0)
    assert c.output() == 0.0
    previous = 0.0
    for _ in range(100):
        clock.advance(10)
        value = c.input(1.0)
        assert value >= previous
        previous = value
    assert 0.0 < previous < 1.0
    clock.advance(1e7)
    c.input(1.0)
    clock.advance(1e7)
    assert c.input(1.0) == pytest.approx(1.0)


def test_cascade_lags_single_pole(clock):
    single = FilterOnePole(FilterType.LOWPASS, 1.0, 0.0, clock)
    single.set_tau(1.0 / FilterOnePoleCascade.TAU_SCALE)
    cascade = FilterOnePoleCascade(1.0, 0.0, clock)
    clock.advance(100)
    assert cascade.input(1.0) < single.input(1.0)


@pytest.mark.parametrize("q, expected", [(0.0, 1e-3), (1e6, 1e3), (2.5, 2.5)])
def test_two_pole_q_is_clamped(clock, q, expected):
    f = FilterTwoPole(clock=clock)
    f.set_q(q)
    assert f.q == expected


def test_two_pole_frequency_ignores_sign(clock):
    a = FilterTwoPole(clock=clock)
    b = FilterTwoPole(clock=clock)
    a.set_frequency0(-3.0)
    b.set_frequency0(3.0)
    assert a.w0 == b.w0 > 0


def test_two_pole_at_rest_stays_put(clock):
    f = FilterTwoPole(1.0, 1.0, 5.0, clock)
    for _ in range(10):
        clock.advance(10)
        assert f.input(5.0) == pytest.approx(5.0)


def test_two_pole_long_pause_is_capped(clock):
    f = FilterTwoPole(1.0, 1.0, 0.0, clock)
    clock.advance(1e9)
    assert f.input(10.0) == pytest.approx(5.0)


def test_two_pole_converges_to_drive(clock):
    f = FilterTwoPole(1.0, 0.7071, 0.0, clock)
    for _ in range(2000):
        clock.advance(5)
        f.input(8.0)
    assert f.output() == pytest.approx(8.0, abs=1e-3)


def test_set_as_filter_butterworth_and_bessel(clock):
    f = FilterTwoPole(clock=clock)
    f.set_as_filter(OscillatorType.LOWPASS_BUTTERWORTH, 2.0, 1.5)
    assert f.q == 0.7071
    assert f.output() == 1.5
    butter_w0 = f.w0
    f.set_as_filter(OscillatorType.LOWPASS_BESSEL, 2.0)
    assert f.q == 0.5774
    assert f.w0 == pytest.approx(butter_w0 * 1.28)
    assert f.output() == 0.0


def test_max_amplitude_at_rest_is_position(clock):
    f = FilterTwoPole(2.0, 1.0, 3.0, clock)
    assert f.max_amplitude() == pytest.approx(3.0)


def test_derivative_of_ramp(clock):
    d = FilterDerivative(clock)
    clock.advance(1000)
    assert d.input(3.0) == pytest.approx(3.0)
    clock.advance(500)
    assert d.input(2.0) == pytest.approx(-2.0)
    assert d.output() == pytest.approx(-2.0)


def test_running_statistics_defaults(clock):
    stats = RunningStatistics(clock)
    assert stats.mean() == 0.0
    assert stats.variance() == 0.0
    assert stats.cv() == 1000.0


def test_running_statistics_initial_value(clock):
    stats = RunningStatistics(clock)
    stats.set_initial_value(2.0, 0.5)
    assert stats.mean() == 2.0
    assert stats.variance() == pytest.approx(0.25)
    assert stats.sigma() == pytest.approx(0.5)
    assert stats.cv() == pytest.approx(0.25)


def test_running_statistics_variance_never_negative(clock):
    stats = RunningStatistics(clock)
    stats.set_window_secs(0.5)
    for value in (1.0, 9.0, -4.0, 2.0, 100.0, 0.0):
        clock.advance(30)
        stats.input(value)
        assert stats.variance() >= 0.0
        assert stats.sigma() == pytest.approx(math.sqrt(stats.variance()))


def test_running_statistics_constant_input_settles(clock):
    stats = RunningStatistics(clock)
    for _ in range(3):
        clock.advance(1e7)
        stats.input(4.0)
    assert stats.mean() == pytest.approx(4.0)
    assert stats.sigma() == pytest.approx(0.0, abs=1e-3)