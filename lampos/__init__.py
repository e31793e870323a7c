"""Control logic for a touch, Bluetooth and infrared driven LED lamp: modes, animations, palettes and filters."""

__version__ = "0.1.0"