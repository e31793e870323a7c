"""Hardware profiles for the supported lamp models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

HARDWARE_VERSION = "5.1"
NUM_COLUMNS = 6
COLUMN_MAPPING = (1, 3, 5, 4, 2, 0)


class LampModel(IntEnum):
    """Lamp builds; each has its own LED count and touch thresholds."""

    S7_01_TO_05 = 1
    S7_05_AND_06_STARBURST = 2
    S7_07_TO_10_STARBURST = 3
    S8_01_TO_02_STARBURST = 4
    S8_03_TO_05_ARTDECO = 5


CURRENT_MODEL = LampModel.S8_03_TO_05_ARTDECO


@dataclass(frozen=True)
class LampProfile:
    """Physical description of one lamp build."""

    model: LampModel
    num_leds: int
    touch_on: int
    touch_off: int
    supports_fft: bool = True
    num_columns: int = NUM_COLUMNS
    column_mapping: tuple[int, ...] = COLUMN_MAPPING
    hardware_version: str = HARDWARE_VERSION


_PROFILES = {
    LampModel.S7_01_TO_05: (15, 1200, 700),
    LampModel.S7_05_AND_06_STARBURST: (14, 900, 500),
    LampModel.S7_07_TO_10_STARBURST: (15, 1200, 1000),
    LampModel.S8_01_TO_02_STARBURST: (15, 1200, 1000),
    LampModel.S8_03_TO_05_ARTDECO: (10, 1500, 1000),
}


def profile_for(model=CURRENT_MODEL) -> LampProfile:
    """Return the profile of a lamp model; raises ValueError for unknown models."""
    model = LampModel(model)
    num_leds, touch_on, touch_off = _PROFILES[model]
    return LampProfile(model=model, num_leds=num_leds, touch_on=touch_on, touch_off=touch_off)