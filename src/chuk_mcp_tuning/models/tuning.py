"""
Tuning table model - the snapshot every exporter reads.

A TuningTable is built once from a list of scale lines plus a base note
and frequency, then treated as read-only by the exporters.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_tuning.constants import TUNING_MAX_SIZE
from chuk_mcp_tuning.core.lines import decimal_to_cents, line_to_decimal

logger = logging.getLogger(__name__)

UNISON = "1/1"


class TuningTable(BaseModel):
    """
    Per-degree and per-MIDI-note view of a scale.

    scale_data and tuning_data are parallel, one entry per scale degree,
    with index 0 the unison. freq and cents are per MIDI note: freq in Hz,
    cents relative to base_frequency.
    """

    scale_data: tuple[str, ...] = Field(default=(UNISON,), description="Scale lines, unison first")
    tuning_data: tuple[float, ...] = Field(
        default=(1.0,), description="Frequency ratio of each scale degree"
    )
    note_count: int = Field(1, ge=0, description="Number of degrees including the unison")
    base_midi_note: int = Field(69, ge=0, le=127, description="MIDI note mapped to the unison")
    base_frequency: float = Field(440.0, gt=0, description="Frequency of the base MIDI note in Hz")
    freq: tuple[float | None, ...] = Field(
        default=(None,) * TUNING_MAX_SIZE, description="Frequency of each MIDI note"
    )
    cents: tuple[float, ...] = Field(
        default=(), description="Cents of each MIDI note relative to base_frequency"
    )

    name: str = Field("", description="Scale title")
    filename: str = Field("tuning", description="Base name for exported files")
    description: str = Field("", description="Free text description")

    model_config = {"frozen": True}

    @field_validator("scale_data")
    @classmethod
    def strip_lines(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Lines are compared and exported without surrounding whitespace."""
        return tuple(line.strip() for line in v)

    @property
    def has_tuning_data(self) -> bool:
        """True if the base MIDI note has a frequency - required by every export."""
        return self.base_midi_note < len(self.freq) and self.freq[self.base_midi_note] is not None

    @property
    def degrees(self) -> tuple[str, ...]:
        """User-specified degrees, without the unison."""
        return self.scale_data[1:]


def build_tuning_table(
    lines: Iterable[str],
    base_frequency: float = 440.0,
    base_midi_note: int = 69,
    name: str = "",
    filename: str = "tuning",
    description: str = "",
) -> TuningTable:
    """
    Build a tuning table from scale lines.

    The last line is the period (usually 2/1); the scale repeats by it
    above and below base_midi_note.

    Args:
        lines: Scale degrees, excluding the unison
        base_frequency: Frequency of base_midi_note in Hz
        base_midi_note: MIDI note that plays the unison
        name: Scale title
        filename: Base name for exported files
        description: Free text description

    Returns:
        The built TuningTable. With no lines, every freq is None.
    """
    degrees = [line.strip() for line in lines if line.strip()]
    scale_data = (UNISON, *degrees)
    tuning_data = (1.0, *(line_to_decimal(line) for line in degrees))
    note_count = len(scale_data)

    freq: list[float | None] = [None] * TUNING_MAX_SIZE
    cents: list[float] = []

    if degrees:
        size = note_count - 1
        period = tuning_data[-1]
        for midi_note in range(TUNING_MAX_SIZE):
            octaves, degree = divmod(midi_note - base_midi_note, size)
            frequency = base_frequency * period**octaves * tuning_data[degree]
            freq[midi_note] = frequency
            cents.append(decimal_to_cents(frequency / base_frequency))
    else:
        logger.debug("No scale lines, tuning table left empty")

    return TuningTable(
        scale_data=scale_data,
        tuning_data=tuning_data,
        note_count=note_count,
        base_midi_note=base_midi_note,
        base_frequency=base_frequency,
        freq=tuple(freq),
        cents=tuple(cents),
        name=name,
        filename=filename,
        description=description,
    )
