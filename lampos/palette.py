"""Five hue/saturation swatches, exchanged as ``pl:`` codes and kept in byte storage."""

from __future__ import annotations

import logging
import math
import re
from typing import MutableSequence

log = logging.getLogger(__name__)

SWATCH_COUNT = 5
_DEFAULT_PALETTE = ((40, 255), (80, 255), (120, 255), (140, 255), (180, 255))
# Codes are parsed from a fixed-size buffer; longer ones are cut.
_MAX_PARSED_LENGTH = 98
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _round(value: float) -> int:
    """Round halves away from zero."""
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def _import_hue(degrees: int) -> int:
    return _round(degrees / 360.0 * 255.0)


def _import_sat(percent: int) -> int:
    return _round(percent / 100.0 * 255.0)


def _export_hue(value: int) -> int:
    return _round(value / 255.0 * 360.0)


def _export_sat(value: int) -> int:
    return _round(value / 255.0 * 100.0)


class PaletteManager:
    """The lamp's colour palette; swatches hold hue and saturation as bytes.

    ``storage`` is a byte sequence of at least ten entries laid out as
    hue, saturation pairs for each swatch.
    """

    def __init__(self, storage: MutableSequence[int] | None = None) -> None:
        self._palette = [list(swatch) for swatch in _DEFAULT_PALETTE]
        if storage is None:
            storage = bytearray(value for swatch in _DEFAULT_PALETTE for value in swatch)
        if len(storage) < SWATCH_COUNT * 2:
            raise ValueError("palette storage needs at least ten bytes")
        self.storage = storage

    def load(self) -> None:
        """Read the swatches from storage."""
        for index, swatch in enumerate(self._palette):
            swatch[0] = self.storage[index * 2]
            swatch[1] = self.storage[index * 2 + 1]

    def save(self) -> None:
        """Write the swatches to storage."""
        values = [value for swatch in self._palette for value in swatch]
        # The second swatch's hue slot has always received its saturation.
        values[2] = self._palette[1][1]
        for address, value in enumerate(values):
            self.storage[address] = value & 0xFF

    def set_from_pl_code(self, code: str) -> None:
        """Set swatches from ``pl:hue:sat:hue:sat...`` (degrees, percent) and save."""
        fields = [part for part in code[:_MAX_PARSED_LENGTH].split(":") if part][1:]
        for index, field in enumerate(fields[: SWATCH_COUNT * 2]):
            row, element = divmod(index, 2)
            value = _atoi(field)
            self._palette[row][element] = _import_hue(value) if element == 0 else _import_sat(value)
            log.debug("swatch %d/%d: %d", row, element, value)
        self.save()

    def to_pl_code(self) -> str:
        """The palette as a ``pl:`` code in degrees and percent."""
        parts = [
            f"{_export_hue(hue)}:{_export_sat(sat)}" for hue, sat in self._palette
        ]
        return "pl:" + ":".join(parts)

    def hue_for_swatch(self, swatch_id: int) -> int:
        if not 0 <= swatch_id < SWATCH_COUNT:
            return 0
        return self._palette[swatch_id][0]

    def sat_for_swatch(self, swatch_id: int) -> int:
        if not 0 <= swatch_id < SWATCH_COUNT:
            return 0
        return self._palette[swatch_id][1]

    def total_swatches(self) -> int:
        return SWATCH_COUNT