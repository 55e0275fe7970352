"""Turns the bottle sensors into MIDI: polling, averaging and note output."""

from __future__ import annotations

import argparse
import bisect
import logging
import time
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

from flaschenorgel.bottle import Bottle
from flaschenorgel.communication import SensorReader

logger = logging.getLogger(__name__)

PROJECT_NAME = "Flaschenorgel"
VERSION_STRING = "1.0.0"
VERSION_NUMBER = 0x10000

_ALL_NOTES_OFF_CONTROLLER = 123
_SHARP_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
_FLAT_NAMES = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")


def _check_channel(channel: int) -> None:
    if not 1 <= channel <= 16:
        raise ValueError(f"MIDI channel must be between 1 and 16, got {channel}")


def _check_data_byte(value: int, what: str) -> None:
    if not 0 <= value <= 127:
        raise ValueError(f"{what} must be between 0 and 127, got {value}")


def all_notes_off(channel: int) -> bytes:
    """Return an "all notes off" controller message for a channel (1-16)."""
    _check_channel(channel)
    return bytes((0xB0 | (channel - 1), _ALL_NOTES_OFF_CONTROLLER, 0))


def note_on(channel: int, note_number: int, velocity: int) -> bytes:
    """Return a note-on message for a channel (1-16)."""
    _check_channel(channel)
    _check_data_byte(note_number, "note number")
    _check_data_byte(velocity, "velocity")
    return bytes((0x90 | (channel - 1), note_number, velocity))


def note_name(
    note_number: int,
    use_sharps: bool = True,
    include_octave: bool = True,
    middle_c_octave: int = 3,
) -> str:
    """Return the name of a MIDI note, or an empty string if it is out of range."""
    if not 0 <= note_number <= 127:
        return ""
    names = _SHARP_NAMES if use_sharps else _FLAT_NAMES
    name = names[note_number % 12]
    if include_octave:
        name += str(note_number // 12 + (middle_c_octave - 5))
    return name


@dataclass(frozen=True)
class MidiEvent:
    """A raw MIDI message placed at a sample position within a block."""

    message: bytes
    sample_position: int

    @property
    def note_number(self) -> int:
        """The first data byte of the message."""
        return self.message[1] if len(self.message) > 1 else 0


@dataclass
class MidiBuffer:
    """Time-ordered MIDI events for one processing block."""

    events: list[MidiEvent] = field(default_factory=list)

    def add_event(self, message: bytes, sample_position: int) -> None:
        """Insert a message after any events at the same or an earlier position."""
        positions = [event.sample_position for event in self.events]
        index = bisect.bisect_right(positions, sample_position)
        self.events.insert(index, MidiEvent(bytes(message), sample_position))

    def last_event_time(self) -> int:
        """Return the position of the last event, or 0 when empty."""
        return self.events[-1].sample_position if self.events else 0

    def __iter__(self) -> Iterator[MidiEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)


def average_note_number(notes: Sequence[int]) -> int:
    """Average the sounding notes (those above 0); 0 when none sound."""
    valid = [note for note in notes if note > 0]
    if not valid:
        return 0
    return sum(valid) // len(valid)


def send_note(note_number: int, channel: int, midi_messages: MidiBuffer) -> str:
    """Silence the channel, then start ``note_number`` unless it is 0.

    Returns the name of the note carried by the last message added.
    """
    velocity = 127
    message = all_notes_off(channel)
    midi_messages.add_event(message, midi_messages.last_event_time())
    if note_number > 0:
        message = note_on(channel, note_number, velocity)
        midi_messages.add_event(message, midi_messages.last_event_time())
    name = note_name(message[1], True, True, 1)
    logger.info("%s", name)
    return name


def _initial_bottles() -> list[Bottle]:
    return [Bottle(350), Bottle(400), Bottle(450)]


@dataclass
class BottleOrgan:
    """Three bottles whose averaged pitch is sent out as MIDI."""

    reader: SensorReader = field(default_factory=SensorReader)
    bottles: list[Bottle] = field(default_factory=_initial_bottles)
    on_update: Callable[[list[Bottle]], None] | None = None
    state_changed: bool = True
    old_values: list[int] = field(default_factory=list)

    MIN_FOR_CHANGE: ClassVar[int] = 20
    CHANNEL: ClassVar[int] = 1
    NAME: ClassVar[str] = PROJECT_NAME
    ACCEPTS_MIDI: ClassVar[bool] = False
    PRODUCES_MIDI: ClassVar[bool] = True
    SILENCE_IN_PRODUCES_SILENCE_OUT: ClassVar[bool] = False
    TAIL_LENGTH_SECONDS: ClassVar[float] = 0.0

    def process_block(self, midi_messages: MidiBuffer) -> None:
        """Emit the averaged note if anything changed since the last block."""
        if not self.state_changed:
            return
        notes = [bottle.note_number() for bottle in self.bottles]
        send_note(average_note_number(notes), self.CHANNEL, midi_messages)
        self.state_changed = False

    def poll(self) -> None:
        """Read the sensors and update bottles whose pressure moved enough.

        Raises ``OSError`` if the sensor file cannot be read.
        """
        values = self.reader.read()
        if values:
            for index, (bottle, value) in enumerate(zip(self.bottles, values)):
                if (
                    not self.old_values
                    or index >= len(self.old_values)
                    or abs(self.old_values[index] - value) >= self.MIN_FOR_CHANGE
                ):
                    bottle.pressure = value
                    self.state_changed = True
        if self.state_changed:
            self.old_values = list(values)
        if self.on_update is not None:
            self.on_update(self.bottles)

    def run(self, interval: float = 0.1, iterations: int | None = None) -> Iterator[MidiEvent]:
        """Poll every ``interval`` seconds and yield the MIDI events produced.

        Runs forever when ``iterations`` is None. Unreadable sensor files are
        logged and the tick carries on with the current state.
        """
        count = 0
        while iterations is None or count < iterations:
            try:
                self.poll()
            except OSError as exc:
                logger.warning("cannot read sensor values: %s", exc)
            buffer = MidiBuffer()
            self.process_block(buffer)
            yield from buffer
            count += 1
            if iterations is None or count < iterations:
                time.sleep(interval)


def main(argv: Sequence[str] | None = None) -> int:
    """Poll the sensor file and print the MIDI messages that result."""
    parser = argparse.ArgumentParser(prog="flaschenorgel", description="Bottle organ MIDI output.")
    parser.add_argument("--file", type=Path, default=None, help="sensor value file")
    parser.add_argument("--interval", type=float, default=0.1, help="seconds between polls")
    parser.add_argument("--iterations", type=int, default=None, help="number of polls")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION_STRING}")
    args = parser.parse_args(argv)

    reader = SensorReader(args.file) if args.file is not None else SensorReader()
    organ = BottleOrgan(reader=reader)
    try:
        for event in organ.run(args.interval, args.iterations):
            print(
                f"{event.sample_position}\t{event.message.hex(' ')}\t"
                f"{note_name(event.note_number, True, True, 1)}",
                flush=True,
            )
    except KeyboardInterrupt:
        pass
    return 0