"""Lighting modes: the common base and the simple colour modes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from .timing import Clock, Stopwatch

log = logging.getLogger(__name__)

MAX_CYCLING_COLOURS = 10


class BaseMode(ABC):
    """A way of driving the LEDs; the lamp runs exactly one at a time."""

    def __init__(self, leds) -> None:
        self.leds = leds
        self.mode_id = -1
        self.mode_name = "?"

    @abstractmethod
    def setup(self) -> None:
        """Prepare the mode once, before it is first used."""

    @abstractmethod
    def restart(self) -> None:
        """Start the mode afresh when it becomes the active one."""

    @abstractmethod
    def loop(self) -> None:
        """Do one step of work; called as often as possible."""

    def _pixels(self) -> Iterable[tuple[int, int]]:
        for x in range(self.leds.x_max()):
            for y in range(self.leds.y_max()):
                yield x, y

    def _set_all_rgb(self, r: int, g: int, b: int, transition_ms: float) -> None:
        for x, y in self._pixels():
            self.leds.set_rgb(x, y, r, g, b, transition_ms)

    def _set_all_hsv(self, h: int, s: int, v: int, transition_ms: float) -> None:
        for x, y in self._pixels():
            self.leds.set_hsv(x, y, h, s, v, transition_ms)


class SetColourOnceMode(BaseMode):
    """Fades every LED to one RGB colour, once per restart."""

    def __init__(self, leds, transition_ms: float, r: int, g: int, b: int) -> None:
        super().__init__(leds)
        self.transition_ms = transition_ms
        self.colour = (r, g, b)
        self._has_triggered = False

    def setup(self) -> None:
        self.restart()

    def restart(self) -> None:
        self._has_triggered = False

    def loop(self) -> None:
        if not self._has_triggered:
            self._has_triggered = True
            self._set_all_rgb(*self.colour, self.transition_ms)


class ColourCyclingRGBMode(BaseMode):
    """Moves all LEDs through a list of RGB colours, one every ``change_every_ms``."""

    def __init__(
        self,
        leds,
        change_every_ms: float,
        transition_ms: float,
        colours: Sequence[Sequence[int]],
        clock: Clock | None = None,
    ) -> None:
        super().__init__(leds)
        triples = [tuple(int(channel) for channel in colour) for colour in colours]
        if not triples:
            raise ValueError("at least one colour is needed")
        if any(len(colour) != 3 for colour in triples):
            raise ValueError("every colour needs exactly three channels")
        if len(triples) > MAX_CYCLING_COLOURS:
            log.warning(
                "too many colours passed (%d), truncating to %d",
                len(triples),
                MAX_CYCLING_COLOURS,
            )
            triples = triples[:MAX_CYCLING_COLOURS]
        self.colours: tuple[tuple[int, int, int], ...] = tuple(triples)
        self.change_every_ms = change_every_ms
        self.transition_ms = transition_ms
        self._timer = Stopwatch(clock)
        self._index = 0

    def setup(self) -> None:
        self.restart()

    def restart(self) -> None:
        # Make the first loop change colour straight away.
        self._timer.reset(self.change_every_ms)
        self._index = 0

    def loop(self) -> None:
        if self._timer.elapsed() >= self.change_every_ms:
            self._timer.reset()
            if self._index >= len(self.colours):
                self._index = 0
            self._set_all_rgb(*self.colours[self._index], self.transition_ms)
            self._index += 1


class SingleColourAnimatingMode(BaseMode):
    """Pulses every LED between full and near-zero brightness in one colour."""

    def __init__(
        self,
        leds,
        transition_ms: float,
        hue: int,
        sat: int,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(leds)
        self.transition_ms = transition_ms
        self.hue = int(hue)
        self.sat = int(sat)
        self._animate_up = True
        self._timer = Stopwatch(clock)

    def setup(self) -> None:
        self.restart()

    def restart(self) -> None:
        self._timer.reset(self.transition_ms + 10)
        self._animate_up = True

    def loop(self) -> None:
        if self._timer.elapsed() >= self.transition_ms:
            self._timer.reset()
            brightness = 255 if self._animate_up else 1
            self._set_all_hsv(self.hue, self.sat, brightness, self.transition_ms)
            self._animate_up = not self._animate_up

    def update_colour(self, hue: float, sat: float) -> None:
        self.hue = int(hue)
        self.sat = int(sat)