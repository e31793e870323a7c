import pytest

from lampos.timing import ManualClock, Stopwatch


def test_manual_clock_advances():
    clock = ManualClock(100)
    assert clock() == 100
    assert clock.advance(25) == 125
    assert clock() == 125


def test_manual_clock_rejects_backwards():
    clock = ManualClock()
    with pytest.raises(ValueError):
        clock.advance(-1)


def test_stopwatch_counts_clock_time():
    clock = ManualClock(50)
    watch = Stopwatch(clock)
    assert watch.elapsed() == 0
    clock.advance(40)
    assert watch.elapsed() == 40


def test_stopwatch_reset_to_value():
    clock = ManualClock()
    watch = Stopwatch(clock)
    clock.advance(300)
    watch.reset()
    assert watch.elapsed() == 0
    watch.reset(1500)
    assert watch.elapsed() == 1500
    clock.advance(10)
    assert watch.elapsed() == 1510


def test_stopwatch_with_real_clock_is_non_negative():
    watch = Stopwatch()
    assert watch.elapsed() >= 0