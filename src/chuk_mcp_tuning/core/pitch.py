"""
Pitch primitives - PitchClass and 12-EDO frequency conversions.

These anchor arbitrary tunings to the standard MIDI keyboard:
MIDI note 69 is A4 at 440 Hz, MIDI note 60 is C4.
"""

from __future__ import annotations

import math
import re
from enum import IntEnum

from chuk_mcp_tuning.core.formatting import js_round

A4_MIDI_NOTE = 69
A4_FREQUENCY = 440.0

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]

_NOTE_NAME = re.compile(r"^([A-Ga-g][#b]?)(-?\d+)$")


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'C#', 'Db'."""
        name = name.strip()
        if name[:1].islower():
            name = name[:1].upper() + name[1:]

        if name in _SHARP_NAMES:
            return cls(_SHARP_NAMES.index(name))
        if name in _FLAT_NAMES:
            return cls(_FLAT_NAMES.index(name))

        raise ValueError(f"Unknown pitch class: {name}")


def midi_note_number_to_name(midi_note: int) -> str:
    """69 -> 'A4', 61 -> 'C#4', 0 -> 'C-1'."""
    note = int(midi_note)
    return PitchClass.from_midi(note).spell() + str(note // 12 - 1)


def note_name_to_midi_note_number(name: str) -> int:
    """'A4' -> 69, 'Db4' -> 61."""
    match = _NOTE_NAME.match(name.strip())
    if match is None:
        raise ValueError(f"Unknown note name: {name}")
    pitch, octave = match.groups()
    return PitchClass.parse(pitch).to_midi(int(octave))


def mtof(midi_note: float) -> float:
    """MIDI note number to frequency, 12-EDO at A4 = 440 Hz."""
    return A4_FREQUENCY * 2 ** ((midi_note - A4_MIDI_NOTE) / 12)


def ftom(frequency: float) -> tuple[int, float]:
    """
    Frequency to the nearest MIDI note and the offset from it in cents.

    The offset lies in [-50, 50).
    """
    midi_note = A4_MIDI_NOTE + 12 * math.log2(frequency / A4_FREQUENCY)
    nearest = js_round(midi_note)
    return nearest, (midi_note - nearest) * 100
