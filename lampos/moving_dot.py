"""A soft round blob that drifts across a wrap-around grid."""

from __future__ import annotations

import math


class MovingDot:
    """A dot with a position, heading and pulsing radius on a toroidal grid."""

    def __init__(self) -> None:
        self.x = 0.0
        self.y = 0.0
        self.x_max = 0.0
        self.y_max = 0.0
        self.radius = 0.0
        self.radius_inc = 0.0
        self.radius_min = 0.0
        self.radius_max = 0.0
        self.angle = 0.0
        self.speed = 0.0
        self.palette_id = 0

    def set_bounds(self, x_max: float, y_max: float, radius_min: float, radius_max: float) -> None:
        self.x_max = x_max
        self.y_max = y_max
        self.radius_min = radius_min
        self.radius_max = radius_max

    def set_position(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def set_direction(self, angle: float, speed: float) -> None:
        """Heading in radians, measured from the y axis towards x."""
        self.angle = angle
        self.speed = speed

    def set_radius(self, radius: float, radius_inc: float) -> None:
        self.radius = radius
        self.radius_inc = radius_inc

    def update(self, animation_time: float) -> None:
        """Move one step; larger ``animation_time`` means a smaller step."""
        distance = self.speed / animation_time
        self.x += math.sin(self.angle) * distance
        if self.x > self.x_max:
            self.x = 0.0
        if self.x < 0:
            self.x = self.x_max

        self.y += math.cos(self.angle) * distance
        if self.y > self.y_max:
            self.y = 0.0
        if self.y < 0:
            self.y = self.y_max

        self.radius += self.radius_inc / animation_time
        if self.radius > self.radius_max:
            self.radius = self.radius_max
            self.radius_inc = -abs(self.radius_inc)
        if self.radius < self.radius_min:
            self.radius = self.radius_min
            self.radius_inc = abs(self.radius_inc)

    @staticmethod
    def _wrapped_sq(centre: float, point: float, size: float) -> float:
        offset = -size if point < size / 2 else size
        direct = centre - point
        wrapped = centre - point + offset
        nearest = direct if abs(direct) < abs(wrapped) else wrapped
        return nearest * nearest

    def intensity_at(self, x: float, y: float) -> float:
        """How strongly the dot lights the point, from 0 to 1."""
        distance = math.sqrt(
            self._wrapped_sq(self.x, x, self.x_max) + self._wrapped_sq(self.y, y, self.y_max)
        )
        return min(max(self.radius - distance, 0.0), 1.0)