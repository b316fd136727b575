"""
Scale preset model - a scale stored as YAML.

Presets let tools export well-known tunings by name instead of
passing every line.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_tuning.core.lines import line_to_decimal
from chuk_mcp_tuning.core.pitch import note_name_to_midi_note_number
from chuk_mcp_tuning.models.tuning import TuningTable, build_tuning_table


class ScalePreset(BaseModel):
    """
    A named scale with its base note and frequency.

    base_midi_note accepts a MIDI number or a note name like 'A4'.
    """

    name: str = Field(..., description="Preset name (also the YAML file stem)")
    description: str = Field("", description="Human-readable description")
    lines: list[str] = Field(..., min_length=1, description="Scale degrees, unison excluded")
    base_frequency: float = Field(440.0, gt=0, description="Frequency of the base note in Hz")
    base_midi_note: int = Field(69, ge=0, le=127, description="MIDI note of the unison")

    model_config = {"frozen": True}

    @field_validator("lines", mode="before")
    @classmethod
    def validate_lines(cls, v: Any) -> Any:
        """Every line must convert to a frequency ratio. YAML numbers become text."""
        if not isinstance(v, list):
            return v
        lines = [str(line).strip() for line in v if str(line).strip()]
        for line in lines:
            line_to_decimal(line)
        return lines

    @field_validator("base_midi_note", mode="before")
    @classmethod
    def parse_note_name(cls, v: Any) -> Any:
        """Allow 'A4' as well as 69."""
        if isinstance(v, str) and not v.strip().isdigit():
            return note_name_to_midi_note_number(v)
        return v

    @property
    def period(self) -> str:
        """The last line, which the scale repeats at."""
        return self.lines[-1]

    def to_tuning_table(self, base_frequency: float | None = None) -> TuningTable:
        """Build a tuning table, optionally overriding the base frequency."""
        return build_tuning_table(
            self.lines,
            base_frequency=base_frequency or self.base_frequency,
            base_midi_note=self.base_midi_note,
            name=self.name,
            filename=self.name,
            description=self.description,
        )


class PresetMetadata(BaseModel):
    """Lightweight preset summary for listings."""

    name: str
    description: str
    size: int = Field(..., description="Number of degrees per period")
    period: str

    @classmethod
    def from_preset(cls, preset: ScalePreset) -> PresetMetadata:
        return cls(
            name=preset.name,
            description=preset.description,
            size=len(preset.lines),
            period=preset.period,
        )
