import dataclasses

import pytest

from lampos.protocol import NO_MESSAGE, LampMessage, MessageType


def test_enum_order_is_fixed():
    assert MessageType(0) is MessageType.NONE
    assert MessageType(8) is MessageType.SET_PALETTE
    assert MessageType(16) is MessageType.CYCLE_FFT_MODE
    assert [member.value for member in MessageType] == list(range(17))


def test_defaults():
    message = LampMessage()
    assert message.type is MessageType.NONE
    assert (message.number, message.number2, message.text) == (0.0, 0.0, "")
    assert message == NO_MESSAGE


def test_truthiness():
    assert not NO_MESSAGE
    assert LampMessage(MessageType.ON)


def test_frozen():
    message = LampMessage(MessageType.SET_MODE, 21)
    with pytest.raises(dataclasses.FrozenInstanceError):
        message.number = 3
    assert message.number == 21
    assert message == LampMessage(MessageType.SET_MODE, 21)


def test_equality_by_value():
    assert LampMessage(MessageType.SET_BRIGHTNESS, 0.5) == LampMessage(MessageType.SET_BRIGHTNESS, 0.5)
    assert LampMessage(MessageType.SET_BRIGHTNESS, 0.5) != LampMessage(MessageType.SET_BRIGHTNESS, 0.6)