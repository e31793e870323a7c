"""Penner easing curves: ``t`` time, ``b`` start, ``c`` change, ``d`` duration."""

from __future__ import annotations

import math


def _sqrt(value: float) -> float:
    return math.sqrt(value) if value >= 0 else math.nan


class Back:
    """Overshooting ease."""

    OVERSHOOT = 1.70158

    @staticmethod
    def ease_in(t, b, c, d):
        s = Back.OVERSHOOT
        t /= d
        return c * t * t * ((s + 1) * t - s) + b

    @staticmethod
    def ease_out(t, b, c, d):
        s = Back.OVERSHOOT
        t = t / d - 1
        return c * (t * t * ((s + 1) * t + s) + 1) + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        s = Back.OVERSHOOT * 1.525
        t /= d / 2
        if t < 1:
            return c / 2 * (t * t * ((s + 1) * t - s)) + b
        t -= 2
        return c / 2 * (t * t * ((s + 1) * t + s) + 2) + b


class Bounce:
    """Bouncing ease."""

    @staticmethod
    def ease_in(t, b, c, d):
        return c - Bounce.ease_out(d - t, 0, c, d) + b

    @staticmethod
    def ease_out(t, b, c, d):
        t /= d
        if t < 1 / 2.75:
            return c * (7.5625 * t * t) + b
        if t < 2 / 2.75:
            t -= 1.5 / 2.75
            return c * (7.5625 * t * t + 0.75) + b
        if t < 2.5 / 2.75:
            t -= 2.25 / 2.75
            return c * (7.5625 * t * t + 0.9375) + b
        t -= 2.625 / 2.75
        return c * (7.5625 * t * t + 0.984375) + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        if t < d / 2:
            return Bounce.ease_in(t * 2, 0, c, d) * 0.5 + b
        return Bounce.ease_out(t * 2 - d, 0, c, d) * 0.5 + c * 0.5 + b


class Circ:
    """Circular ease; outside the duration the result is NaN."""

    @staticmethod
    def ease_in(t, b, c, d):
        t /= d
        return -c * (_sqrt(1 - t * t) - 1) + b

    @staticmethod
    def ease_out(t, b, c, d):
        t = t / d - 1
        return c * _sqrt(1 - t * t) + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        t /= d / 2
        if t < 1:
            return -c / 2 * (_sqrt(1 - t * t) - 1) + b
        t -= 2
        return c / 2 * (_sqrt(1 - t * t) + 1) + b


class Cubic:
    """Cubic ease."""

    @staticmethod
    def ease_in(t, b, c, d):
        t /= d
        return c * t ** 3 + b

    @staticmethod
    def ease_out(t, b, c, d):
        t = t / d - 1
        return c * (t ** 3 + 1) + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        t /= d / 2
        if t < 1:
            return c / 2 * t ** 3 + b
        t -= 2
        return c / 2 * (t ** 3 + 2) + b


class Elastic:
    """Spring-like ease."""

    @staticmethod
    def ease_in(t, b, c, d):
        if t == 0:
            return b
        t /= d
        if t == 1:
            return b + c
        p = d * 0.3
        s = p / 4
        t -= 1
        amplitude = c * 2 ** (10 * t)
        return -(amplitude * math.sin((t * d - s) * (2 * math.pi) / p)) + b

    @staticmethod
    def ease_out(t, b, c, d):
        if t == 0:
            return b
        t /= d
        if t == 1:
            return b + c
        p = d * 0.3
        s = p / 4
        return c * 2 ** (-10 * t) * math.sin((t * d - s) * (2 * math.pi) / p) + c + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        if t == 0:
            return b
        t /= d / 2
        if t == 2:
            return b + c
        p = d * (0.3 * 1.5)
        s = p / 4
        if t < 1:
            t -= 1
            amplitude = c * 2 ** (10 * t)
            return -0.5 * (amplitude * math.sin((t * d - s) * (2 * math.pi) / p)) + b
        t -= 1
        amplitude = c * 2 ** (-10 * t)
        return amplitude * math.sin((t * d - s) * (2 * math.pi) / p) * 0.5 + c + b


class Expo:
    """Exponential ease."""

    @staticmethod
    def ease_in(t, b, c, d):
        return b if t == 0 else c * 2 ** (10 * (t / d - 1)) + b

    @staticmethod
    def ease_out(t, b, c, d):
        return b + c if t == d else c * (-(2 ** (-10 * t / d)) + 1) + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        if t == 0:
            return b
        if t == d:
            return b + c
        t /= d / 2
        if t < 1:
            return c / 2 * 2 ** (10 * (t - 1)) + b
        t -= 1
        return c / 2 * (-(2 ** (-10 * t)) + 2) + b


class Linear:
    """Straight-line interpolation; every variant is the same."""

    @staticmethod
    def ease_none(t, b, c, d):
        return c * t / d + b

    @staticmethod
    def ease_in(t, b, c, d):
        return c * t / d + b

    @staticmethod
    def ease_out(t, b, c, d):
        return c * t / d + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        return c * t / d + b


class Quad:
    """Quadratic ease."""

    @staticmethod
    def ease_in(t, b, c, d):
        t /= d
        return c * t * t + b

    @staticmethod
    def ease_out(t, b, c, d):
        t /= d
        return -c * t * (t - 2) + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        t /= d / 2
        if t < 1:
            return c / 2 * (t * t) + b
        t -= 1
        return -c / 2 * (t * (t - 2) - 1) + b


class Quart:
    """Quartic ease."""

    @staticmethod
    def ease_in(t, b, c, d):
        t /= d
        return c * t ** 4 + b

    @staticmethod
    def ease_out(t, b, c, d):
        t = t / d - 1
        return -c * (t ** 4 - 1) + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        t /= d / 2
        if t < 1:
            return c / 2 * t ** 4 + b
        t -= 2
        return -c / 2 * (t ** 4 - 2) + b


class Quint:
    """Quintic ease."""

    @staticmethod
    def ease_in(t, b, c, d):
        t /= d
        return c * t ** 5 + b

    @staticmethod
    def ease_out(t, b, c, d):
        t = t / d - 1
        return c * (t ** 5 + 1) + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        t /= d / 2
        if t < 1:
            return c / 2 * t ** 5 + b
        t -= 2
        return c / 2 * (t ** 5 + 2) + b


class Sine:
    """Sinusoidal ease."""

    @staticmethod
    def ease_in(t, b, c, d):
        return -c * math.cos(t / d * (math.pi / 2)) + c + b

    @staticmethod
    def ease_out(t, b, c, d):
        return c * math.sin(t / d * (math.pi / 2)) + b

    @staticmethod
    def ease_in_out(t, b, c, d):
        return -c / 2 * (math.cos(math.pi * t / d) - 1) + b