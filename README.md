# flaschenorgel

This package treats a bottle organ as a MIDI source. Each of three bottles has a pressure
sensor. A helper program writes the sensor readings to a text file as a `|`-separated line,
for example `350|400|450`. Each reading is turned into a MIDI note. The organ plays the
integer average of the notes that are sounding, on MIDI channel 1 at velocity 127.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
flaschenorgel [--file PATH] [--interval SECONDS] [--iterations N] [--version]
```

The command reads the sensor file every `--interval` seconds. The default interval is 0.1
seconds. The default file is `tmp_flaschenorgel.txt` in your home directory. Without
`--iterations` the command runs until you interrupt it.

For each MIDI event it produces, the command prints one tab-separated line with three
fields:

- the sample position;
- the message bytes in hex;
- the note name of the message's first data byte.

If the sensor file cannot be read, the command logs a warning and carries on with the state
it already has.

## Library use

### `flaschenorgel.bottle`

`Bottle(pressure)` holds one reading. `Bottle.note_number()` maps the reading to a MIDI note
clamped to 0–127:

- A reading at or below the tare value, `Bottle.TARA` (300), gives 0, which means silence.
- A reading of 650 gives the centre note, 62.

### `flaschenorgel.communication`

`parse` turns a sensor line into integers. It stops at the first token that is not an
integer.

```python
from flaschenorgel.communication import parse

parse("350|400|450")   # [350, 400, 450]
```

`SensorReader(path).read()` parses the last whitespace-separated token of the file. It
raises `OSError` if the file cannot be read.

### `flaschenorgel.processor`

- `all_notes_off(channel)` and `note_on(channel, note_number, velocity)` return raw MIDI
  messages as `bytes`. They raise `ValueError` for a channel outside 1–16 or a data byte
  outside 0–127.
- `note_name(note_number, use_sharps, include_octave, middle_c_octave)` names a note. It
  returns an empty string when the note is out of range.
- `MidiBuffer` holds `MidiEvent`s ordered by sample position. Use `add_event` to add one and
  `last_event_time` to get the position of the last event.
- `average_note_number(notes)` returns the integer average of the notes above 0, or 0 if
  there are none.
- `send_note(note_number, channel, midi_messages)` adds an all-notes-off message. If the
  note is positive it then adds a note-on message. It returns the name of the note in the
  last message added.
- `BottleOrgan` starts with bottles at 350, 400 and 450. It offers three methods:
  - `poll()` reads the sensors. It takes a new value for a bottle only when the value moves
    by at least 20. If you supply an `on_update` callback, it calls it with the bottles.
  - `process_block(midi_messages)` sends the averaged note when the state has changed.
  - `run(interval, iterations)` polls in a loop and yields the MIDI events it produces.

## What it does not do

The package does not open a MIDI port or talk to a synthesizer. It only builds the messages
and prints them. It does not read the serial port of the sensor hardware either, so another
program has to keep the sensor file up to date. There is no graphical view of the bottles.
The `on_update` callback on `BottleOrgan` is the place to attach one.