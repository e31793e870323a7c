# lampos

`lampos` holds the control logic of a multi-column LED lamp. It turns
touches, Bluetooth text commands and infrared remote codes into lighting
modes, runs animations over a grid of LEDs with eased colour transitions,
keeps a five-swatch colour palette and turns audio spectrum bins into
sound-reactive light.

Nothing in the package talks to hardware. The touch sensor, the outgoing
Bluetooth link, the palette storage and the clock are plain Python objects
you pass in, so the whole lamp can run in a test or a simulator, or on top
of whatever drivers you have.

## Modules

- `lampos.config` – lamp models (`LampModel`), their hardware profile
  (`LampProfile`: LED count, touch thresholds, column mapping, hardware
  version) and `profile_for(model)`.
- `lampos.timing` – `ManualClock`, a millisecond clock you move with
  `advance()`, and `Stopwatch`, an elapsed-milliseconds counter on any clock.
- `lampos.easing` – Penner easing curves: `Back`, `Bounce`, `Circ`, `Cubic`,
  `Elastic`, `Expo`, `Linear`, `Quad`, `Quart`, `Quint` and `Sine`, each with
  static `ease_in`, `ease_out` and `ease_in_out` taking `(t, b, c, d)`
  (time, start, change, duration). `Linear` also has `ease_none`.
- `lampos.protocol` – `MessageType` and the frozen `LampMessage`
  (`type`, `number`, `number2`, `text`); an empty message is falsy.
- `lampos.bluetooth` – `parse_command(text)` and `BluetoothInput`, which
  collects fed text into newline-terminated commands (`feed`, `poll`) and
  sends replies with `send_message`.
- `lampos.remote` – `RemoteButton` codes, `message_for_code(code, supports_fft)`
  and `IRInput`, a queue of received codes (`receive`, `poll`).
- `lampos.filters` – `FilterOnePole` (low-pass, high-pass, integrator,
  differentiator), `FilterOnePoleCascade`, `FilterTwoPole` (Bessel or
  Butterworth low-pass), `FilterDerivative` and `RunningStatistics`. All of
  them read a millisecond clock, so their response follows real time
  between calls.
- `lampos.leds` – `LEDManager`, the LED grid with per-pixel sine
  transitions, a `brightness` property kept between 0.1 and 1, and
  `pixel(x, y)` giving the last rendered RGB colour; `hsv_to_rgb` converts
  byte HSV to byte RGB.
- `lampos.palette` – `PaletteManager`, five hue/saturation swatches,
  read from and written to a byte sequence (`load`, `save`) and exchanged
  as `pl:` codes (`set_from_pl_code`, `to_pl_code`).
- `lampos.animation` – `AnimationManager`, the shared animation `speed` in
  milliseconds (never below 10; larger is slower).
- `lampos.audio` – `AudioManager`, which folds 256 FFT magnitude bins into
  six bands with peak hold, decay and automatic gain.
- `lampos.touch` – `TouchInput`, smoothing and hysteresis over a raw touch
  reading, reporting `TouchState` events and how long a touch has lasted.
- `lampos.modes`, `lampos.fft_modes`, `lampos.animation_modes`,
  `lampos.moving_dot` – the lighting modes.
- `lampos.lamp` – `LampOS`, which ties inputs and modes together.

## Modes

| Id | Name       | Kind                                         |
|----|------------|----------------------------------------------|
| 0  | `off`      | fade to black                                |
| 1  | `bright`   | fade to white                                |
| 20 | `classic`  | every LED rises and falls at its own rate    |
| 21 | `wipe`     | a swatch wiped up the lamp row by row        |
| 22 | `splatter` | LEDs lit one by one in a shuffled order      |
| 23 | `lava`     | soft blobs drifting over a wrap-around grid  |
| 11 | `bars`     | audio level bars (lamps with sound support)  |
| 12 | `pulse`    | three pulsing audio bands                    |

`md:<id>` selects an animation or sound mode; the ids are set when
`LampOS.setup()` runs.

## Bluetooth commands

Commands are single lines of text:

| Command            | Effect                                   |
|--------------------|------------------------------------------|
| `st:on`, `st:off`  | switch the lamp on or off                |
| `an:slow`, `an:fast`, `an:<ms>` | set the animation speed     |
| `am:<factor>`      | multiply the animation speed             |
| `br:<delta>`       | change the brightness by a step          |
| `bs:<level>`       | set the brightness                       |
| `pl:<h>:<s>:...`   | set the palette (hue in degrees, saturation in percent) |
| `v:pal`            | ask for the palette                      |
| `cs:<hue>:<sat>`   | show a single pulsing colour             |
| `v:get`, `v:lvl`   | ask for the version and for the levels   |
| `d:sendsens:1` / `0` | turn touch-level reporting on or off   |
| `md:<id>`          | pick a mode by its id                    |

Unknown lines give the empty message.

```python
from lampos.bluetooth import BluetoothInput, parse_command
from lampos.protocol import MessageType

message = parse_command("am:0.5")
assert message.type is MessageType.MULT_ANIM_SPEED
assert message.number == 0.5

link = BluetoothInput()
link.feed(b"st:o")
assert not link.poll()           # no complete line yet
link.feed("n\n")
assert link.poll().type is MessageType.ON
```

## Remote control

On lamps with sound support, button A cycles the animation modes and B the
sound modes; otherwise A, B and C set the animation speed to 200, 5000 and
20000 ms. Up and down multiply the speed by 0.75 and 1.25, left and right
change the brightness by 0.1, and power toggles the lamp.

## Easing

```python
from lampos.easing import Sine

# halfway through a 1000 ms fade from 0 to 200: about 100
value = Sine.ease_in_out(500, 0, 200, 1000)
```

## Running a lamp

`LampOS` takes a hardware profile, a function that reads the touch sensor,
a function that receives outgoing Bluetooth lines, a mutable byte sequence
of at least ten entries used as palette storage (left out, it starts with
the default palette) and a clock returning milliseconds. A `ManualClock`
makes the lamp fully deterministic:

```python
from lampos.bluetooth import parse_command
from lampos.config import LampModel, profile_for
from lampos.lamp import LampOS
from lampos.timing import ManualClock

clock = ManualClock(0)
sent = []
lamp = LampOS(
    profile_for(LampModel.S8_03_TO_05_ARTDECO),
    touch_sensor=lambda: 0,
    bluetooth_writer=sent.append,
    clock=clock,
)
lamp.setup()

lamp.handle_message(parse_command("v:get"))
print(sent[-1])            # version and the list of modes

lamp.handle_message(parse_command("md:21"))
for _ in range(120):
    clock.advance(1000 / 60)
    lamp.loop()
print(lamp.leds.pixel(0, 0))
```

Call `loop()` as often as you can. The lamp reads its touch sensor, the
Bluetooth text fed to `lamp.bluetooth` and the codes given to
`lamp.remote.receive()` at most 60 times a second, then steps the current
mode and renders the LEDs.

## What the package does not do

- It drives no LEDs, serial ports, infrared receivers or touch pins; the
  rendered colours are read back with `LEDManager.pixel()` and replies go to
  the writer you pass in.
- It computes no FFT: sound modes take magnitude bins from a
  `bins_source` callable set on the mode, or from `AudioManager.update(bins)`.
- It keeps the palette only in the byte sequence you give it; saving that to
  a file or device is up to you.
- It has no command-line program.