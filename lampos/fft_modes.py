"""Sound-reactive modes that light the LEDs from audio band levels."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from .modes import BaseMode

log = logging.getLogger(__name__)

BinsSource = Callable[[], "Sequence[float] | None"]


class BaseFFTMode(BaseMode):
    """A mode that reads the palette and the audio analyser.

    ``bins_source``, when set, is asked for fresh FFT bins on every loop;
    it may return ``None`` when no new analysis is ready.
    """

    def __init__(self, leds, palette, audio) -> None:
        super().__init__(leds)
        self.palette = palette
        self.audio = audio
        self.bins_source: BinsSource | None = None

    def _update_audio(self) -> None:
        bins = self.bins_source() if self.bins_source is not None else None
        self.audio.update(bins)

    def _set_from_swatch(self, x: int, y: int, swatch: int, value: int) -> None:
        hue = self.palette.hue_for_swatch(swatch)
        sat = self.palette.sat_for_swatch(swatch)
        self.leds.set_hsv(x, y, hue, sat, value, 0)


class FFTBarsMode(BaseFFTMode):
    """Each column is a level bar for one audio band."""

    def setup(self) -> None:
        self.mode_id = 11
        self.mode_name = "bars"

    def restart(self) -> None:
        log.debug("bars mode restart")

    def loop(self) -> None:
        self._update_audio()
        rows = self.leds.y_max()
        for y in range(rows):
            for x in range(self.leds.x_max()):
                swatch = ((x * rows + y) // 3) % 5
                value = self.audio.value_for_led(x % 4, y, rows)
                self._set_from_swatch(x, y, swatch, value)


class FFTPulseMode(BaseFFTMode):
    """The rows are split into three bands that pulse with the music."""

    TOTAL_BANDS = 3

    def setup(self) -> None:
        self.mode_id = 12
        self.mode_name = "pulse"

    def restart(self) -> None:
        log.debug("pulse mode restart")

    def loop(self) -> None:
        self._update_audio()
        rows = self.leds.y_max()
        columns = self.leds.x_max()
        per_band = float(rows // self.TOTAL_BANDS)
        for y in range(rows):
            for x in range(columns):
                band = int(y / per_band)
                swatch = (band + x * columns) % 5
                value = self.audio.value_for_led(band % 4, band, self.TOTAL_BANDS)
                self._set_from_swatch(x, y, swatch, value)