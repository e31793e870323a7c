import pytest

from lampos.animation import AnimationManager


def test_default_speed():
    assert AnimationManager().speed == 100.0


def test_set_speed():
    animation = AnimationManager()
    animation.speed = 500
    assert animation.speed == 500


@pytest.mark.parametrize("requested", [5, 0, -100])
def test_speed_has_a_floor(requested):
    animation = AnimationManager()
    animation.speed = requested
    assert animation.speed == 10.0