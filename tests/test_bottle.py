import pytest

from flaschenorgel.bottle import Bottle


def test_default_pressure_is_silent():
    bottle = Bottle()
    assert bottle.pressure == 0
    assert bottle.note_number() == 0


def test_pressure_at_tara_is_silent():
    assert Bottle(Bottle.TARA).note_number() == 0


def test_pressure_below_tara_is_silent():
    assert Bottle(Bottle.TARA - 50).note_number() == 0


def test_center_pressure_gives_center_note():
    bottle = Bottle(Bottle.TARA + Bottle.DELTA_RANGE)
    assert bottle.note_number() == Bottle.NOTE_NUMBER_CENTER


@pytest.mark.parametrize("offset", [-12, -1, 1, 12])
def test_small_offsets_truncate_toward_center(offset):
    bottle = Bottle(Bottle.TARA + Bottle.DELTA_RANGE + offset)
    assert bottle.note_number() == Bottle.NOTE_NUMBER_CENTER


def test_one_step_above_center_raises_one_semitone():
    bottle = Bottle(Bottle.TARA + Bottle.DELTA_RANGE + 13)
    assert bottle.note_number() == Bottle.NOTE_NUMBER_CENTER + 1


def test_very_high_pressure_clamps_to_midi_maximum():
    assert Bottle(100_000).note_number() == 127


def test_pressure_is_mutable():
    bottle = Bottle()
    bottle.pressure = Bottle.TARA + Bottle.DELTA_RANGE
    assert bottle.note_number() == Bottle.NOTE_NUMBER_CENTER


def test_notes_are_monotonic_and_in_range():
    notes = [Bottle(p).note_number() for p in range(0, 1200, 7)]
    assert all(0 <= n <= 127 for n in notes)
    assert notes == sorted(notes)


def test_audible_notes_are_positive():
    for pressure in range(Bottle.TARA + 1, 1000, 11):
        assert Bottle(pressure).note_number() > 0