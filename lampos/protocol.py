"""Messages passed from the lamp's inputs to its controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class MessageType(IntEnum):
    """What a message asks the lamp to do."""

    NONE = 0
    ON = 1
    OFF = 2
    TOGGLE_ON = 3
    SET_ANIM_SPEED = 4
    MULT_ANIM_SPEED = 5
    INC_BRIGHTNESS = 6
    SET_BRIGHTNESS = 7
    SET_PALETTE = 8
    GET_PALETTE = 9
    SET_COLOUR = 10
    GET_VERSION = 11
    GET_LEVELS = 12
    DEBUG_SENSITIVITY = 13
    SET_MODE = 14
    CYCLE_ANIM_MODE = 15
    CYCLE_FFT_MODE = 16


@dataclass(frozen=True)
class LampMessage:
    """A request with up to two numbers and a text argument."""

    type: MessageType = MessageType.NONE
    number: float = 0.0
    number2: float = 0.0
    text: str = ""

    def __bool__(self) -> bool:
        return self.type is not MessageType.NONE


NO_MESSAGE = LampMessage()