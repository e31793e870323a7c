"""The lamp controller: reads the inputs, switches lighting modes and reports state."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, MutableSequence

from .animation import AnimationManager
from .animation_modes import (
    ColourWipeMode,
    MovingDotsMode,
    OriginalAnimationMode,
    RandomPixelMode,
)
from .audio import AudioManager
from .bluetooth import BluetoothInput
from .config import LampProfile, profile_for
from .fft_modes import FFTBarsMode, FFTPulseMode
from .leds import LEDManager
from .modes import BaseMode, ColourCyclingRGBMode, SetColourOnceMode, SingleColourAnimatingMode
from .palette import PaletteManager
from .protocol import LampMessage, MessageType
from .remote import IRInput
from .timing import Clock, Stopwatch
from .touch import TouchInput, TouchState

log = logging.getLogger(__name__)

INITIAL_TOUCH_DOWN_TIME = 1500
INPUT_FRAME_MS = 1000.0 / 60
MIN_BRIGHTNESS = 0.1
MAX_BRIGHTNESS = 1.0

_RGB_COLOURS = ((255, 0, 0), (0, 255, 0), (0, 0, 255))
_TOUCHDOWN_COLOURS = (
    (10, 20, 12),
    (180, 220, 180),
    (20, 10, 12),
    (220, 180, 180),
    (10, 10, 20),
    (180, 180, 220),
)


class LampState(Enum):
    """Whether the lamp is lit, and whether it is on its way there."""

    OFF = "off"
    TURNING_ON = "turning_on"
    ON = "on"
    TURNING_OFF = "turning_off"


def _named(mode: SetColourOnceMode, mode_id: int, name: str) -> SetColourOnceMode:
    mode.mode_id = mode_id
    mode.mode_name = name
    return mode


class LampOS:
    """Owns the LEDs, inputs and modes, and runs exactly one mode at a time."""

    def __init__(
        self,
        profile: LampProfile | None = None,
        touch_sensor: Callable[[], float] | None = None,
        bluetooth_writer: Callable[[str], object] | None = None,
        storage: MutableSequence[int] | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.profile = profile if profile is not None else profile_for()
        self.leds = LEDManager(
            self.profile.num_columns,
            self.profile.num_leds,
            self.profile.column_mapping,
            clock,
        )
        self.palette = PaletteManager(storage)
        self.animation = AnimationManager()

        sensor = touch_sensor if touch_sensor is not None else (lambda: 0.0)
        self.touch = TouchInput(self.profile.touch_on, self.profile.touch_off, sensor, clock)
        self.bluetooth = BluetoothInput(bluetooth_writer)
        self.remote = IRInput(self.profile.supports_fft)

        leds = self.leds
        self.rgb_mode = ColourCyclingRGBMode(leds, 1500, 1300.0, _RGB_COLOURS, clock)
        self.touchdown_cycling_mode = ColourCyclingRGBMode(
            leds, 1000, 1000.0, _TOUCHDOWN_COLOURS, clock
        )
        self.animation_mode = OriginalAnimationMode(leds, self.palette, self.animation, clock)
        self.bright_fade_in_mode = _named(
            SetColourOnceMode(leds, INITIAL_TOUCH_DOWN_TIME, 200, 200, 200), 1, "bright"
        )
        self.bright_mode = _named(SetColourOnceMode(leds, 0, 255, 255, 255), 1, "bright")
        self.switch_off_mode = _named(SetColourOnceMode(leds, 2000, 0, 0, 0), 0, "off")
        self.off_mode = _named(SetColourOnceMode(leds, 0, 0, 0, 0), 0, "off")
        self.single_colour_mode = SingleColourAnimatingMode(leds, 3000, 255, 255, clock)
        self.colour_wipe_mode = ColourWipeMode(leds, self.palette, self.animation, clock)
        self.random_pixel_mode = RandomPixelMode(leds, self.palette, self.animation, clock)
        self.moving_dots_mode = MovingDotsMode(leds, self.palette, self.animation, clock)

        self.animation_modes: tuple[BaseMode, ...] = (
            self.animation_mode,
            self.colour_wipe_mode,
            self.random_pixel_mode,
            self.moving_dots_mode,
        )
        self.last_active_animation_mode: BaseMode = self.animation_mode

        self.audio: AudioManager | None = None
        self.fft_modes: tuple[BaseMode, ...] = ()
        if self.profile.supports_fft:
            self.audio = AudioManager()
            self.fft_bars_mode = FFTBarsMode(leds, self.palette, self.audio)
            self.fft_pulse_mode = FFTPulseMode(leds, self.palette, self.audio)
            self.fft_modes = (self.fft_bars_mode, self.fft_pulse_mode)

        self.mode: BaseMode = self.off_mode
        self.lamp_state = LampState.OFF
        self.debug_touch_amount = False
        self._frame = Stopwatch(clock)
        self.frame_size = INPUT_FRAME_MS

    def _all_modes(self) -> tuple[BaseMode, ...]:
        return (
            self.rgb_mode,
            self.touchdown_cycling_mode,
            self.animation_mode,
            self.bright_fade_in_mode,
            self.bright_mode,
            self.switch_off_mode,
            self.off_mode,
            self.single_colour_mode,
            self.colour_wipe_mode,
            self.random_pixel_mode,
            self.moving_dots_mode,
        ) + self.fft_modes

    def setup(self) -> None:
        """Load the palette, calibrate the touch sensor and prepare every mode."""
        self.lamp_state = LampState.OFF
        self.palette.load()
        self.touch.setup()
        for mode in self._all_modes():
            mode.setup()
        log.debug("setup complete (fft %s)", "supported" if self.fft_modes else "not supported")

    def loop(self) -> None:
        """Poll the inputs at most once a frame, then step the mode and the LEDs."""
        if self._frame.elapsed() > self.frame_size:
            self._frame.reset()
            self.handle_touch(*self.touch.poll())
            self.handle_message(self.bluetooth.poll())
            self.handle_message(self.remote.poll())
            if self.debug_touch_amount:
                self.bluetooth.send_message(f"<t={self.touch.touch_amount:.0f}/>")
        self.mode.loop()
        self.leds.loop()

    def _switch_to(self, mode: BaseMode) -> None:
        self.mode = mode
        mode.restart()

    def handle_touch(self, state: TouchState, value: float = 0.0) -> None:
        """React to a touch event; ``value`` is how long the touch has lasted in ms."""
        state = TouchState(state)
        if state is TouchState.TOUCH_DOWN:
            if self.lamp_state is LampState.ON:
                self.lamp_state = LampState.TURNING_OFF
                self._switch_to(self.switch_off_mode)
            else:
                self.lamp_state = LampState.TURNING_ON
                self._switch_to(self.bright_fade_in_mode)
        elif state is TouchState.TOUCH_ACTIVE:
            if self.lamp_state is LampState.TURNING_ON:
                if value < INITIAL_TOUCH_DOWN_TIME and self.mode is not self.bright_fade_in_mode:
                    self._switch_to(self.bright_fade_in_mode)
                if (
                    value >= INITIAL_TOUCH_DOWN_TIME
                    and self.mode is not self.touchdown_cycling_mode
                ):
                    self._switch_to(self.touchdown_cycling_mode)
        elif state is TouchState.TOUCH_UP:
            log.debug("touch ended after %s ms", value)
            if self.lamp_state is LampState.TURNING_OFF:
                self.lamp_state = LampState.OFF
                self._switch_to(self.off_mode)
            elif self.lamp_state is LampState.TURNING_ON:
                self.lamp_state = LampState.ON
                if value < INITIAL_TOUCH_DOWN_TIME:
                    self._switch_to(self.bright_mode)
                else:
                    self.animation.speed = (value - INITIAL_TOUCH_DOWN_TIME) / 20.0
                    self._switch_to(self.last_active_animation_mode)

    def _ensure_animating(self) -> None:
        if self.mode not in self.animation_modes:
            self.lamp_state = LampState.ON
            self._switch_to(self.last_active_animation_mode)

    def handle_message(self, message: LampMessage) -> None:
        """Carry out a command from Bluetooth or the remote."""
        kind = message.type
        if kind is MessageType.NONE:
            return
        if kind is MessageType.ON:
            self._switch_to(self.bright_fade_in_mode)
            self.send_state()
        elif kind is MessageType.TOGGLE_ON:
            if self.lamp_state in (LampState.ON, LampState.TURNING_ON):
                self.lamp_state = LampState.OFF
                self._switch_to(self.switch_off_mode)
            else:
                self.lamp_state = LampState.ON
                self._switch_to(self.bright_fade_in_mode)
            self.send_state()
        elif kind is MessageType.OFF:
            self.lamp_state = LampState.OFF
            self._switch_to(self.switch_off_mode)
            self.send_state()
        elif kind is MessageType.SET_ANIM_SPEED:
            self.animation.speed = message.number
            self._ensure_animating()
            self.send_state()
        elif kind is MessageType.MULT_ANIM_SPEED:
            self.animation.speed = self.animation.speed * message.number
            self._ensure_animating()
            self.send_state()
        elif kind is MessageType.INC_BRIGHTNESS:
            level = self.leds.brightness + message.number
            self.leds.brightness = min(max(level, MIN_BRIGHTNESS), MAX_BRIGHTNESS)
            self.send_state()
        elif kind is MessageType.SET_BRIGHTNESS:
            self.leds.brightness = message.number
            self.send_state()
        elif kind is MessageType.SET_PALETTE:
            self.palette.set_from_pl_code(message.text)
            log.debug("palette now %s", self.palette.to_pl_code())
        elif kind is MessageType.GET_PALETTE:
            self.bluetooth.send_message(f"<p={self.palette.to_pl_code()}/>")
        elif kind is MessageType.SET_COLOUR:
            self.single_colour_mode.update_colour(message.number, message.number2)
            self._switch_to(self.single_colour_mode)
        elif kind is MessageType.GET_VERSION:
            self.bluetooth.send_message(self.version_message())
        elif kind is MessageType.GET_LEVELS:
            self.send_state()
        elif kind is MessageType.DEBUG_SENSITIVITY:
            self.debug_touch_amount = message.number >= 1
        elif kind is MessageType.SET_MODE:
            self._set_mode(int(message.number))
        elif kind is MessageType.CYCLE_FFT_MODE:
            self._cycle_fft_mode()
        elif kind is MessageType.CYCLE_ANIM_MODE:
            self._cycle_anim_mode()

    def _set_mode(self, requested_id: int) -> None:
        matches = [m for m in self.animation_modes + self.fft_modes if m.mode_id == requested_id]
        if not matches:
            return
        found = matches[-1]
        log.debug("found mode %s", found.mode_name)
        self.lamp_state = LampState.ON
        self.mode = found
        if found in self.animation_modes:
            self.last_active_animation_mode = found
        found.restart()
        self.send_state()

    def _cycle_fft_mode(self) -> None:
        if not self.fft_modes:
            return
        modes = self.fft_modes
        index = modes.index(self.mode) if self.mode in modes else -1
        self.mode = modes[(index + 1) % len(modes)]
        self.lamp_state = LampState.ON
        self.mode.restart()
        self.send_state()

    def _cycle_anim_mode(self) -> None:
        modes = self.animation_modes
        if self.mode in modes:
            self.mode = modes[(modes.index(self.mode) + 1) % len(modes)]
            self.last_active_animation_mode = self.mode
        else:
            self.mode = self.last_active_animation_mode
        self.lamp_state = LampState.ON
        self.mode.restart()
        self.send_state()

    def send_state(self) -> None:
        """Report speed, brightness, mode and touch bias over Bluetooth."""
        self.bluetooth.send_message(
            f"<s={self.animation.speed:.2f}/>"
            f"<b={self.leds.brightness:.3f}/>"
            f"<md={int(self.mode.mode_id)}:{self.mode.mode_name}/>"
            f"<tb={self.touch.bias:.2f}>"
        )

    def version_message(self) -> str:
        """Hardware version and the selectable animation and sound modes."""

        def listing(modes) -> str:
            return ",".join(f"{m.mode_id}:{m.mode_name}" for m in modes)

        message = f"<v={self.profile.hardware_version}/><anim={listing(self.animation_modes)}/>"
        if self.fft_modes:
            message += f"<fft={listing(self.fft_modes)}/>"
        return message