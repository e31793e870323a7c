import pytest

from lampos.config import LampModel, LampProfile
from lampos.lamp import LampOS, LampState
from lampos.protocol import LampMessage, MessageType
from lampos.remote import RemoteButton
from lampos.timing import ManualClock
from lampos.touch import TouchState


@pytest.fixture
def sent():
    return []


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def lamp(sent, clock):
    lamp_os = LampOS(bluetooth_writer=sent.append, clock=clock)
    lamp_os.setup()
    return lamp_os


def test_starts_off(lamp):
    assert lamp.mode is lamp.off_mode
    assert lamp.lamp_state is LampState.OFF


def test_version_message(lamp):
    assert lamp.version_message() == (
        "<v=5.1/><anim=20:classic,21:wipe,22:splatter,23:lava/><fft=11:bars,12:pulse/>"
    )


def test_get_version_sends_version(lamp, sent):
    lamp.handle_message(LampMessage(MessageType.GET_VERSION))
    assert sent == [lamp.version_message() + "\n"]


def test_send_state_format(lamp, sent):
    lamp.send_state()
    assert sent == ["<s=100.00/><b=1.000/><md=0:off/><tb=0.00>\n"]
    assert lamp.animation.speed == pytest.approx(100.0)
    assert lamp.leds.brightness == pytest.approx(1.0)
    assert lamp.mode is lamp.off_mode


def test_touch_down_from_off_starts_turning_on(lamp):
    lamp.handle_touch(TouchState.TOUCH_DOWN, 0)
    assert lamp.lamp_state is LampState.TURNING_ON
    assert lamp.mode is lamp.bright_fade_in_mode


def test_long_touch_switches_to_cycling(lamp):
    lamp.handle_touch(TouchState.TOUCH_DOWN, 0)
    lamp.handle_touch(TouchState.TOUCH_ACTIVE, 1600)
    assert lamp.mode is lamp.touchdown_cycling_mode
    lamp.handle_touch(TouchState.TOUCH_ACTIVE, 200)
    assert lamp.mode is lamp.bright_fade_in_mode


def test_short_touch_up_turns_bright(lamp):
    lamp.handle_touch(TouchState.TOUCH_DOWN, 0)
    lamp.handle_touch(TouchState.TOUCH_UP, 300)
    assert lamp.lamp_state is LampState.ON
    assert lamp.mode is lamp.bright_mode


def test_long_touch_up_sets_speed_and_animates(lamp):
    lamp.handle_touch(TouchState.TOUCH_DOWN, 0)
    lamp.handle_touch(TouchState.TOUCH_UP, 6500)
    assert lamp.lamp_state is LampState.ON
    assert lamp.mode is lamp.last_active_animation_mode
    assert lamp.animation.speed == pytest.approx(250.0)


def test_touch_turns_lamp_off(lamp):
    lamp.handle_touch(TouchState.TOUCH_DOWN, 0)
    lamp.handle_touch(TouchState.TOUCH_UP, 300)
    lamp.handle_touch(TouchState.TOUCH_DOWN, 0)
    assert lamp.lamp_state is LampState.TURNING_OFF
    assert lamp.mode is lamp.switch_off_mode
    lamp.handle_touch(TouchState.TOUCH_UP, 100)
    assert lamp.lamp_state is LampState.OFF
    assert lamp.mode is lamp.off_mode


def test_toggle_on_and_off(lamp):
    lamp.handle_message(LampMessage(MessageType.TOGGLE_ON))
    assert lamp.lamp_state is LampState.ON
    assert lamp.mode is lamp.bright_fade_in_mode
    lamp.handle_message(LampMessage(MessageType.TOGGLE_ON))
    assert lamp.lamp_state is LampState.OFF
    assert lamp.mode is lamp.switch_off_mode


def test_set_mode_selects_animation(lamp, sent):
    lamp.handle_message(LampMessage(MessageType.SET_MODE, 21))
    assert lamp.mode is lamp.colour_wipe_mode
    assert lamp.last_active_animation_mode is lamp.colour_wipe_mode
    assert lamp.lamp_state is LampState.ON
    assert "<md=21:wipe/>" in sent[-1]


def test_set_mode_fft_keeps_last_animation(lamp):
    lamp.handle_message(LampMessage(MessageType.SET_MODE, 12))
    assert lamp.mode is lamp.fft_pulse_mode
    assert lamp.last_active_animation_mode is lamp.animation_mode


def test_set_unknown_mode_is_ignored(lamp, sent):
    lamp.handle_message(LampMessage(MessageType.SET_MODE, 99))
    assert lamp.mode is lamp.off_mode
    assert sent == []


def test_cycle_animation_modes(lamp):
    lamp.handle_message(LampMessage(MessageType.CYCLE_ANIM_MODE))
    assert lamp.mode is lamp.animation_mode
    seen = []
    for _ in range(4):
        lamp.handle_message(LampMessage(MessageType.CYCLE_ANIM_MODE))
        seen.append(lamp.mode)
    assert seen == [
        lamp.colour_wipe_mode,
        lamp.random_pixel_mode,
        lamp.moving_dots_mode,
        lamp.animation_mode,
    ]
    assert lamp.last_active_animation_mode is lamp.animation_mode


def test_cycle_fft_modes(lamp):
    lamp.handle_message(LampMessage(MessageType.CYCLE_FFT_MODE))
    assert lamp.mode is lamp.fft_bars_mode
    lamp.handle_message(LampMessage(MessageType.CYCLE_FFT_MODE))
    assert lamp.mode is lamp.fft_pulse_mode
    lamp.handle_message(LampMessage(MessageType.CYCLE_FFT_MODE))
    assert lamp.mode is lamp.fft_bars_mode
    assert lamp.lamp_state is LampState.ON


def test_brightness_is_clamped(lamp):
    lamp.handle_message(LampMessage(MessageType.INC_BRIGHTNESS, -5))
    assert lamp.leds.brightness == pytest.approx(0.1)
    lamp.handle_message(LampMessage(MessageType.INC_BRIGHTNESS, 5))
    assert lamp.leds.brightness == pytest.approx(1.0)


def test_set_brightness(lamp):
    lamp.handle_message(LampMessage(MessageType.SET_BRIGHTNESS, 0.5))
    assert lamp.leds.brightness == pytest.approx(0.5)


def test_set_speed_starts_animation(lamp):
    lamp.handle_message(LampMessage(MessageType.SET_ANIM_SPEED, 500))
    assert lamp.animation.speed == 500
    assert lamp.mode is lamp.animation_mode
    assert lamp.lamp_state is LampState.ON


def test_multiply_speed(lamp):
    lamp.handle_message(LampMessage(MessageType.SET_ANIM_SPEED, 400))
    lamp.handle_message(LampMessage(MessageType.MULT_ANIM_SPEED, 0.5))
    assert lamp.animation.speed == pytest.approx(200)


def test_palette_messages(lamp, sent):
    lamp.handle_message(LampMessage(MessageType.SET_PALETTE, text="pl:0:100:90:50"))
    assert lamp.palette.hue_for_swatch(0) == 0
    assert lamp.palette.sat_for_swatch(0) == 255
    lamp.handle_message(LampMessage(MessageType.GET_PALETTE))
    assert sent == [f"<p={lamp.palette.to_pl_code()}/>\n"]


def test_set_colour(lamp):
    lamp.handle_message(LampMessage(MessageType.SET_COLOUR, 30, 200))
    assert lamp.mode is lamp.single_colour_mode
    assert (lamp.single_colour_mode.hue, lamp.single_colour_mode.sat) == (30, 200)


def test_remote_power_through_loop(lamp, clock):
    lamp.remote.receive(RemoteButton.POWER)
    clock.advance(20)
    lamp.loop()
    assert lamp.lamp_state is LampState.ON
    assert lamp.mode is lamp.bright_fade_in_mode


def test_bluetooth_command_through_loop(lamp, clock):
    lamp.bluetooth.feed("md:22\n")
    clock.advance(20)
    lamp.loop()
    assert lamp.mode is lamp.random_pixel_mode


def test_debug_sensitivity_reports_touch(lamp, clock, sent):
    lamp.handle_message(LampMessage(MessageType.DEBUG_SENSITIVITY, 1))
    clock.advance(20)
    lamp.loop()
    assert sent == ["<t=0/>\n"]
    assert lamp.mode is lamp.off_mode
    lamp.handle_message(LampMessage(MessageType.DEBUG_SENSITIVITY, 0))
    clock.advance(20)
    lamp.loop()
    assert len(sent) == 1
    assert lamp.lamp_state is LampState.OFF


def test_bright_mode_lights_leds(lamp, clock):
    lamp.handle_touch(TouchState.TOUCH_DOWN, 0)
    lamp.handle_touch(TouchState.TOUCH_UP, 100)
    clock.advance(20)
    lamp.loop()
    assert lamp.leds.pixel(0, 0) == (255, 255, 255)
    assert lamp.leds.pixel(5, 9) == (255, 255, 255)


def test_without_fft(sent, clock):
    profile = LampProfile(LampModel.S7_01_TO_05, 15, 1200, 700, supports_fft=False)
    lamp_os = LampOS(profile=profile, bluetooth_writer=sent.append, clock=clock)
    lamp_os.setup()
    assert "<fft=" not in lamp_os.version_message()
    lamp_os.handle_message(LampMessage(MessageType.CYCLE_FFT_MODE))
    assert lamp_os.mode is lamp_os.off_mode
    assert sent == []