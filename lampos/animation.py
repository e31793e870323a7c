"""Shared animation speed."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)

MIN_SPEED = 10.0


class AnimationManager:
    """Holds the animation speed in milliseconds; larger is slower."""

    def __init__(self) -> None:
        self._speed = 100.0

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        value = max(value, MIN_SPEED)
        log.debug("animation speed %s", value)
        self._speed = value