"""Palette-driven animation modes whose pace follows the shared animation speed."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from .modes import BaseMode
from .moving_dot import MovingDot
from .timing import Clock, Stopwatch

log = logging.getLogger(__name__)

ANIMATION_FRAME_RATE = 60.0
RANDOM_SEED = 80
MAX_DOTS = 5


class BaseAnimationMode(BaseMode):
    """A mode that colours LEDs from the palette at the animation manager's speed."""

    def __init__(self, leds, palette, animation, clock: Clock | None = None) -> None:
        super().__init__(leds)
        self.palette = palette
        self.animation = animation
        self._clock = clock

    def _swatch_colour(self, swatch: int) -> tuple[int, int]:
        return self.palette.hue_for_swatch(swatch), self.palette.sat_for_swatch(swatch)

    def _advance_swatch(self, swatch: int) -> int:
        swatch += 1
        return 0 if swatch >= self.palette.total_swatches() else swatch


@dataclass
class LightDot:
    """State of one LED in the classic animation."""

    column: int
    led: int
    current_value: float = 0.0
    increment: float = 0.0
    minimum_value: float = 0.0
    maximum_value: float = 255.0
    colour_id: int = 0


class OriginalAnimationMode(BaseAnimationMode):
    """Every LED rises and falls at its own rate, changing swatch at the bottom."""

    def __init__(self, leds, palette, animation, clock: Clock | None = None) -> None:
        super().__init__(leds, palette, animation, clock)
        self.lights: list[list[LightDot]] = []
        self.frame_size = 0.0
        self.current_speed = 5000.0
        self._frame = Stopwatch(clock)

    def setup(self) -> None:
        self.mode_id = 20
        self.mode_name = "classic"
        self.frame_size = self.animation.speed / ANIMATION_FRAME_RATE
        self.lights = [
            [LightDot(column, led) for led in range(self.leds.y_max())]
            for column in range(self.leds.x_max())
        ]
        self.restart()

    def _increment_for(self, led: int, speed: float) -> float:
        time_elapsed = speed / 100.0
        margin = time_elapsed / 10.0
        duration = time_elapsed + (led % 10) * margin
        return 1 / (duration / self.frame_size)

    def restart(self) -> None:
        log.debug("classic animation restart")
        self.current_speed = self.animation.speed
        swatches = self.palette.total_swatches()
        for c, column in enumerate(self.lights):
            for d, dot in enumerate(column):
                dot.colour_id = d % swatches
                # Start some on, some off and some in between.
                dot.current_value = ((c % 3) + (d % 3)) * (255 / 6.0)
                dot.increment = self._increment_for(d, self.current_speed)
                dot.minimum_value = -210.0 - ((d + 2) % 4) * 30
                dot.maximum_value = 255.0 + ((d + 3) % 7) * 30

    def loop(self) -> None:
        speed = self.animation.speed
        if self.current_speed != speed:
            self.current_speed = speed
            for column in self.lights:
                for d, dot in enumerate(column):
                    dot.increment = self._increment_for(d, speed)

        if self._frame.elapsed() <= speed / ANIMATION_FRAME_RATE:
            return
        self._frame.reset()
        swatches = self.palette.total_swatches()
        for column in self.lights:
            for dot in column:
                self._step(dot, swatches)
                self._render(dot)

    @staticmethod
    def _step(dot: LightDot, swatches: int) -> None:
        dot.current_value += dot.increment
        if dot.increment < 0 and dot.current_value < dot.minimum_value:
            dot.current_value = dot.minimum_value
            dot.increment = abs(dot.increment)
            dot.colour_id += 1
            if dot.colour_id >= swatches:
                dot.colour_id = 0
        elif dot.increment > 0 and dot.current_value > dot.maximum_value:
            dot.current_value = dot.maximum_value
            dot.increment = -abs(dot.increment)

    def _render(self, dot: LightDot) -> None:
        # Values run past 0 and 255 so that LEDs stay off or on for a while.
        if dot.current_value > 0:
            value = int(min(255.0, dot.current_value))
            hue, sat = self._swatch_colour(dot.colour_id)
            self.leds.set_hsv(dot.column, dot.led, hue, sat, value, 0)
        else:
            self.leds.set_rgb(dot.column, dot.led, 0, 0, 0, 0)


class ColourWipeMode(BaseAnimationMode):
    """Wipes one swatch up the lamp row by row, then moves to the next swatch."""

    def __init__(self, leds, palette, animation, clock: Clock | None = None) -> None:
        super().__init__(leds, palette, animation, clock)
        self.current_row = 0
        self.current_swatch = 0
        self._timer = Stopwatch(clock)

    def setup(self) -> None:
        self.mode_id = 21
        self.mode_name = "wipe"
        self.restart()

    def restart(self) -> None:
        self.current_row = 0
        self.current_swatch = 0

    def loop(self) -> None:
        speed = self.animation.speed
        if self._timer.elapsed() <= speed:
            return
        self._timer.reset()
        hue, sat = self._swatch_colour(self.current_swatch)
        transition_ms = speed * 4
        for column in range(self.leds.x_max()):
            self.leds.set_hsv(column, self.current_row, hue, sat, 255, transition_ms)

        self.current_row += 1
        if self.current_row >= self.leds.y_max():
            self.current_row = 0
            self.current_swatch = self._advance_swatch(self.current_swatch)


class RandomPixelMode(BaseAnimationMode):
    """Lights every LED once in a shuffled order, then reshuffles with the next swatch."""

    def __init__(
        self,
        leds,
        palette,
        animation,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(leds, palette, animation, clock)
        self._rng = rng if rng is not None else random.Random(RANDOM_SEED)
        self._timer = Stopwatch(clock)
        self.dots: list[tuple[int, int]] = []
        self.current_dot = 0
        self.current_swatch = 0

    def setup(self) -> None:
        self.mode_id = 22
        self.mode_name = "splatter"
        self.dots = [
            (column, led)
            for column in range(self.leds.x_max())
            for led in range(self.leds.y_max())
        ]

    def restart(self) -> None:
        self.current_dot = 0
        self.current_swatch = 0
        self._rng.shuffle(self.dots)

    def loop(self) -> None:
        speed = self.animation.speed
        if self._timer.elapsed() <= speed / self.leds.x_max():
            return
        self._timer.reset()
        column, led = self.dots[self.current_dot]
        hue, sat = self._swatch_colour(self.current_swatch)
        self.leds.set_hsv(column, led, hue, sat, 255, speed * 4)

        self.current_dot += 1
        if self.current_dot >= len(self.dots):
            self._rng.shuffle(self.dots)
            self.current_dot = 0
            self.current_swatch = self._advance_swatch(self.current_swatch)


class MovingDotsMode(BaseAnimationMode):
    """Soft blobs drift across the wrap-around grid; the brightest one colours each LED."""

    FRAME_MS = 1000.0 / 60.0

    def __init__(self, leds, palette, animation, clock: Clock | None = None) -> None:
        super().__init__(leds, palette, animation, clock)
        self.dots: list[MovingDot] = []
        self._timer = Stopwatch(clock)

    def setup(self) -> None:
        self.mode_id = 23
        self.mode_name = "lava"
        self.dots = []
        for index in range(MAX_DOTS):
            dot = MovingDot()
            dot.set_bounds(self.leds.x_max(), self.leds.y_max(), 1.0, 4.0)
            dot.palette_id = index % 5
            self.dots.append(dot)
        self.restart()

    def restart(self) -> None:
        segment = math.pi / 3
        x_step = self.leds.x_max() // 5
        y_step = self.leds.y_max() // 5
        for index, dot in enumerate(self.dots):
            dot.set_position(x_step * index, y_step * index)
            dot.set_direction(math.pi / 32 - segment / 2 + (segment / 5.0) * index, 1.0)
            dot.set_radius(1.0 + 0.6 * index, 0.05)

    def loop(self) -> None:
        step = self.animation.speed / 6
        for dot in self.dots:
            dot.update(step)

        if self._timer.elapsed() <= self.FRAME_MS:
            return
        self._timer.reset()
        for x in range(self.leds.x_max()):
            for y in range(self.leds.y_max()):
                hue, sat, brightness = 0, 0, 0.0
                for dot in self.dots:
                    intensity = dot.intensity_at(float(x), float(y))
                    if intensity > brightness:
                        hue, sat = self._swatch_colour(dot.palette_id)
                        brightness = intensity
                self.leds.set_hsv(
                    x, y, int(hue), int(sat), int(brightness * 255), self.FRAME_MS / 2.0
                )