"""A single bottle of the organ: maps an air-pressure reading to a MIDI note."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

MIDI_NOTE_MIN = 0
MIDI_NOTE_MAX = 127


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division that truncates toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator >= 0) else -quotient


@dataclass
class Bottle:
    """A pressure sensor attached to one bottle.

    A reading at or below ``TARA`` mutes the bottle. Above it, the pressure
    is mapped onto a note range centred on ``NOTE_NUMBER_CENTER``.
    """

    pressure: int = 0

    TARA: ClassVar[int] = 300
    DELTA_RANGE: ClassVar[int] = 700 // 2
    NOTE_NUMBER_CENTER: ClassVar[int] = 62
    NOTE_NUMBER_RANGE: ClassVar[int] = 26

    def note_number(self) -> int:
        """Return the MIDI note for the current pressure, 0 meaning silence."""
        note = 0
        delta_pressure = self.pressure - self.TARA
        if delta_pressure > 0:
            step = self.DELTA_RANGE // self.NOTE_NUMBER_RANGE
            delta_note = _trunc_div(delta_pressure - self.DELTA_RANGE, step)
            note = self.NOTE_NUMBER_CENTER + delta_note
        return max(MIDI_NOTE_MIN, min(MIDI_NOTE_MAX, note))