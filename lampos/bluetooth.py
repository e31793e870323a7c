"""Line-based command protocol spoken over the Bluetooth serial link."""

from __future__ import annotations

import logging
import re
from typing import Callable

from .protocol import NO_MESSAGE, LampMessage, MessageType

log = logging.getLogger(__name__)

# Commands are parsed from a fixed-size buffer; longer lines are cut.
_MAX_PARSED_LENGTH = 98

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _fields(text: str) -> list[str]:
    """Colon-separated fields, empty ones dropped, after the command word."""
    parts = [part for part in text[:_MAX_PARSED_LENGTH].split(":") if part]
    return parts[1:]


def _field(fields: list[str], index: int) -> str:
    return fields[index] if index < len(fields) else ""


def parse_command(text: str) -> LampMessage:
    """Turn one received line into a message; unknown lines give the empty message."""
    fields = _fields(text)

    if text == "st:on":
        return LampMessage(MessageType.ON)
    if text == "st:off":
        return LampMessage(MessageType.OFF)

    if text == "an:slow":
        return LampMessage(MessageType.SET_ANIM_SPEED, 10000)
    if text == "an:fast":
        return LampMessage(MessageType.SET_ANIM_SPEED, 100)
    if text.startswith("an"):
        return LampMessage(MessageType.SET_ANIM_SPEED, float(_atoi(_field(fields, 0))))
    if text.startswith("am"):
        return LampMessage(MessageType.MULT_ANIM_SPEED, _atof(_field(fields, 0)))
    if text.startswith("br"):
        return LampMessage(MessageType.INC_BRIGHTNESS, _atof(_field(fields, 0)))
    if text.startswith("bs"):
        return LampMessage(MessageType.SET_BRIGHTNESS, _atof(_field(fields, 0)))
    if text.startswith("pl"):
        return LampMessage(MessageType.SET_PALETTE, text=text)
    if text.startswith("v:pal"):
        return LampMessage(MessageType.GET_PALETTE)
    if text.startswith("cs"):
        hue, sat = _field(fields, 0), _field(fields, 1)
        return LampMessage(MessageType.SET_COLOUR, _atof(hue), _atof(sat), sat)
    if text.startswith("v:get"):
        return LampMessage(MessageType.GET_VERSION)
    if text.startswith("v:lvl"):
        return LampMessage(MessageType.GET_LEVELS)
    if text.startswith("d:sendsens:1"):
        return LampMessage(MessageType.DEBUG_SENSITIVITY, 1)
    if text.startswith("d:sendsens:0"):
        return LampMessage(MessageType.DEBUG_SENSITIVITY, 0)
    if text.startswith("md"):
        return LampMessage(MessageType.SET_MODE, float(_atoi(_field(fields, 0))))

    log.debug("message unknown %r", text)
    return NO_MESSAGE


class BluetoothInput:
    """Buffers incoming serial text and yields one command per poll."""

    def __init__(self, writer: Callable[[str], object] | None = None) -> None:
        self._writer = writer
        self._pending = ""
        self._line = ""
        self.outbox: list[str] = []

    def feed(self, data: str | bytes) -> None:
        """Queue received characters."""
        if isinstance(data, bytes):
            data = data.decode("latin-1")
        self._pending += data

    def poll(self) -> LampMessage:
        """Read up to the next newline and return its command, if a line is complete."""
        newline = self._pending.find("\n")
        if newline < 0:
            self._line += self._pending
            self._pending = ""
            return NO_MESSAGE
        line = self._line + self._pending[:newline]
        self._pending = self._pending[newline + 1:]
        self._line = ""
        log.debug("received %r", line)
        return parse_command(line)

    def send_message(self, message: str) -> None:
        """Send one line to the connected device."""
        line = f"{message}\n"
        if self._writer is None:
            self.outbox.append(line)
        else:
            self._writer(line)