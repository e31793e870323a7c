"""Infrared remote control buttons and the commands they send."""

from __future__ import annotations

import logging
from collections import deque
from enum import IntEnum

from .protocol import NO_MESSAGE, LampMessage, MessageType

log = logging.getLogger(__name__)


class RemoteButton(IntEnum):
    """Codes sent by the remote's buttons."""

    POWER = 0x00FF629D
    A = 0x00FF22DD
    B = 0x00FF02FD
    C = 0x00FFC23D
    UP = 0x00FF9867
    DOWN = 0x00FF38C7
    LEFT = 0x00FF30CF
    RIGHT = 0x00FF7A85
    SELECT = 0x00FF18E7


_COMMON = {
    RemoteButton.POWER: LampMessage(MessageType.TOGGLE_ON),
    RemoteButton.UP: LampMessage(MessageType.MULT_ANIM_SPEED, 0.75),
    RemoteButton.DOWN: LampMessage(MessageType.MULT_ANIM_SPEED, 1.25),
    RemoteButton.LEFT: LampMessage(MessageType.INC_BRIGHTNESS, -0.1),
    RemoteButton.RIGHT: LampMessage(MessageType.INC_BRIGHTNESS, 0.1),
}

_WITH_FFT = {
    RemoteButton.A: LampMessage(MessageType.CYCLE_ANIM_MODE),
    RemoteButton.B: LampMessage(MessageType.CYCLE_FFT_MODE),
}

_WITHOUT_FFT = {
    RemoteButton.A: LampMessage(MessageType.SET_ANIM_SPEED, 200),
    RemoteButton.B: LampMessage(MessageType.SET_ANIM_SPEED, 5000),
    RemoteButton.C: LampMessage(MessageType.SET_ANIM_SPEED, 20000),
}


def message_for_code(code: int, supports_fft: bool = True) -> LampMessage:
    """The command a received code stands for; unknown codes give the empty message."""
    extra = _WITH_FFT if supports_fft else _WITHOUT_FFT
    try:
        button = RemoteButton(code)
    except ValueError:
        return NO_MESSAGE
    log.debug("remote button %s", button.name)
    return extra.get(button) or _COMMON.get(button, NO_MESSAGE)


class IRInput:
    """Queue of received remote codes, decoded one per poll."""

    def __init__(self, supports_fft: bool = True) -> None:
        self.supports_fft = supports_fft
        self._codes: deque[int] = deque()

    def receive(self, code: int) -> None:
        self._codes.append(code)

    def poll(self) -> LampMessage:
        if not self._codes:
            return NO_MESSAGE
        return message_for_code(self._codes.popleft(), self.supports_fft)