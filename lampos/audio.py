"""Band levels from FFT bins, with peak hold, decay and automatic gain."""

from __future__ import annotations

import math
from typing import Sequence


class AudioManager:
    """Turns FFT magnitude bins into six smoothed, normalised bands."""

    BANDS = ((0, 2), (3, 7), (8, 19), (20, 47), (48, 110), (111, 255))
    BAND_MINIMUM = 0.0191
    BAND_DECAY = 0.9
    BAND_OFF_DECAY = 0.6
    FFT_DECAY = 0.95
    SILENCE = 0.004

    def __init__(self) -> None:
        self.values = [0.0] * len(self.BANDS)
        self.max_band = 0.0
        self.max_band_decayed = self.BAND_MINIMUM
        self.multiplier = 1.0

    def update(self, bins: Sequence[float] | None) -> None:
        """Take a new set of FFT bins; ``None`` means no new analysis is ready."""
        if bins is None:
            return
        for index, (first, last) in enumerate(self.BANDS):
            self._update_band(index, sum(bins[first:last + 1]))
        self._update_gain()

    def _update_band(self, index: int, level: float) -> None:
        held = self.values[index]
        if held <= 0.01:
            held = 0.0
        self.values[index] = level if level > held else held * self.FFT_DECAY

    def _update_gain(self) -> None:
        loudest = max(max(self.values), 0.0)
        if loudest > self.max_band:
            self.max_band = loudest
        else:
            self.max_band = max(self.max_band * self.BAND_DECAY, self.BAND_MINIMUM)

        if self.max_band > self.BAND_MINIMUM:
            self.max_band_decayed = self.max_band
            self.multiplier = 1 / self.max_band
        else:
            # Fade the gain out rather than holding it at full sensitivity.
            self.max_band_decayed = max(self.max_band_decayed * self.BAND_OFF_DECAY, 0.01)
            if self.max_band_decayed > 0.01:
                self.multiplier = 1 / self.max_band_decayed
            else:
                self.multiplier = 0.0

    def value_for(self, band: int) -> float:
        return self.values[band]

    def _level(self, value: float, number: int, maxnum: int) -> float:
        if value < self.SILENCE:
            return 0.0
        level = value * self.multiplier * maxnum - number
        if level >= 1:
            return 1.0
        if level < 0:
            return 0.0
        return math.fmod(level, 1.0)

    def value_for_led(self, band: int, number: int, maxnum: int) -> int:
        """Brightness byte for LED ``number`` of ``maxnum`` in a bar showing ``band``."""
        level = 0.1 + self._level(self.value_for(band), number, maxnum) * 0.9
        return int(level * 255)