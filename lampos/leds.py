"""LED matrix state with per-pixel colour tweens and global brightness."""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from enum import Enum

from .config import COLUMN_MAPPING, NUM_COLUMNS, profile_for
from .easing import Sine
from .timing import Clock, Stopwatch

LED_FRAME_RATE = 60.0
MIN_BRIGHTNESS = 0.1
MAX_BRIGHTNESS = 1.0


class TweenType(Enum):
    """How a colour channel moves towards its target."""

    NO_TWEEN = "none"
    SINE = "sine"


@dataclass
class ColourTween:
    """One colour channel of one pixel and its running transition."""

    current: float = 0.0
    tween_type: TweenType = TweenType.NO_TWEEN
    begin: float = 0.0
    change: float = 0.0
    duration: float = 0.0

    def set_now(self, value: float) -> None:
        self.current = value
        self.tween_type = TweenType.NO_TWEEN

    def start(self, target: float, duration: float) -> None:
        self.begin = self.current
        self.change = target - self.current
        self.duration = duration
        self.tween_type = TweenType.SINE

    def advance(self, time: float) -> None:
        """Move to where the transition is ``time`` ms after it started."""
        if self.tween_type is TweenType.SINE:
            self.current = Sine.ease_in_out(time, self.begin, self.change, self.duration)
        if time >= self.duration:
            self.tween_type = TweenType.NO_TWEEN


def hsv_to_rgb(h: int, s: int, v: int) -> tuple[int, int, int]:
    """Convert a hue/saturation/value triple (each a byte) to RGB bytes."""
    r, g, b = colorsys.hsv_to_rgb((h & 0xFF) / 256.0, (s & 0xFF) / 255.0, (v & 0xFF) / 255.0)
    return round(r * 255), round(g * 255), round(b * 255)


def _to_byte(value: float) -> int:
    return min(max(int(value), 0), 255)


class LEDManager:
    """Holds the colour of every LED and renders tweens at a fixed frame rate.

    Coordinates given to ``set_rgb``, ``set_hsv`` and ``pixel`` are logical
    columns; they are mapped to physical columns through ``column_mapping``.
    """

    def __init__(
        self,
        columns: int = NUM_COLUMNS,
        rows: int | None = None,
        column_mapping: tuple[int, ...] = COLUMN_MAPPING,
        clock: Clock | None = None,
    ) -> None:
        if rows is None:
            rows = profile_for().num_leds
        mapping = tuple(column_mapping)
        if len(mapping) != columns or any(not 0 <= x < columns for x in mapping):
            raise ValueError("column mapping must name every column exactly once")
        self._columns = columns
        self._rows = rows
        self._mapping = mapping
        self._tweens = [
            [(ColourTween(), ColourTween(), ColourTween()) for _ in range(rows)]
            for _ in range(columns)
        ]
        self._timers = [[Stopwatch(clock) for _ in range(rows)] for _ in range(columns)]
        self._pixels = [[(0, 0, 0)] * rows for _ in range(columns)]
        self._frame = Stopwatch(clock)
        self.frame_size = 1000.0 / LED_FRAME_RATE
        self._brightness = MAX_BRIGHTNESS

    def x_max(self) -> int:
        return self._columns

    def y_max(self) -> int:
        return self._rows

    def loop(self) -> None:
        """Render the pixels if a frame's worth of time has passed."""
        if self._frame.elapsed() >= self.frame_size:
            self._frame.reset()
            self._update()

    def _update(self) -> None:
        for column_tweens, column_timers, column_pixels in zip(
            self._tweens, self._timers, self._pixels
        ):
            for y, (tweens, timer) in enumerate(zip(column_tweens, column_timers)):
                time = timer.elapsed()
                for tween in tweens:
                    tween.advance(time)
                column_pixels[y] = tuple(
                    _to_byte(tween.current * self._brightness) for tween in tweens
                )

    def set_rgb(self, x: int, y: int, r: int, g: int, b: int, duration_ms: float = 0) -> None:
        """Set a pixel's colour, immediately or as a sine transition over ``duration_ms``."""
        if not 0 <= x < self._columns:
            raise IndexError(f"column {x} out of range")
        px = self._mapping[x]
        if not 0 <= y < self._rows:
            return
        self._timers[px][y].reset()
        for tween, target in zip(self._tweens[px][y], (r, g, b)):
            if duration_ms <= 0:
                tween.set_now(target)
            else:
                tween.start(target, duration_ms)

    def set_hsv(self, x: int, y: int, h: int, s: int, v: int, duration_ms: float = 0) -> None:
        r, g, b = hsv_to_rgb(h, s, v)
        self.set_rgb(x, y, r, g, b, duration_ms)

    @property
    def brightness(self) -> float:
        """Global brightness, kept between 0.1 and 1."""
        return self._brightness

    @brightness.setter
    def brightness(self, level: float) -> None:
        self._brightness = min(max(level, MIN_BRIGHTNESS), MAX_BRIGHTNESS)

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """The last rendered RGB colour of a pixel."""
        if not 0 <= x < self._columns or not 0 <= y < self._rows:
            raise IndexError(f"pixel ({x}, {y}) out of range")
        return self._pixels[self._mapping[x]][y]