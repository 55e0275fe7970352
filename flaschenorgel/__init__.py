"""Pressure-sensing bottle organ that turns sensor readings into MIDI notes."""

__version__ = "1.0.0"