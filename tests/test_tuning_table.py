"""
Tests for the TuningTable model and builder.
"""

import pytest
from pydantic import ValidationError

from chuk_mcp_tuning.constants import TUNING_MAX_SIZE
from chuk_mcp_tuning.errors import InvalidLineError
from chuk_mcp_tuning.models.tuning import TuningTable, build_tuning_table


class TestBuildTuningTable:
    """Tests for build_tuning_table."""

    def test_degrees(self, just_table: TuningTable) -> None:
        """Unison is prepended to the lines."""
        assert just_table.scale_data == ("1/1", "9/8", "5/4", "2/1")
        assert just_table.tuning_data == (1.0, 1.125, 1.25, 2.0)
        assert just_table.note_count == 4
        assert just_table.degrees == ("9/8", "5/4", "2/1")

    def test_frequencies_above_base(self, just_table: TuningTable) -> None:
        """Degrees repeat by the period going up."""
        assert just_table.freq[69] == 440.0
        assert just_table.freq[70] == 495.0
        assert just_table.freq[71] == 550.0
        assert just_table.freq[72] == 880.0
        assert just_table.freq[73] == 990.0

    def test_frequencies_below_base(self, just_table: TuningTable) -> None:
        """Degrees repeat by the period going down."""
        assert just_table.freq[68] == 275.0
        assert just_table.freq[66] == 220.0

    def test_cents_per_midi_note(self, just_table: TuningTable) -> None:
        """Cents relative to the base frequency for every note."""
        assert len(just_table.cents) == TUNING_MAX_SIZE
        assert just_table.cents[69] == 0.0
        assert just_table.cents[72] == 1200.0
        assert just_table.cents[66] == -1200.0

    def test_full_keyboard(self, just_table: TuningTable) -> None:
        """All 128 notes have frequencies."""
        assert len(just_table.freq) == TUNING_MAX_SIZE
        assert all(f is not None for f in just_table.freq)
        assert just_table.has_tuning_data

    def test_edo(self, edo_table: TuningTable) -> None:
        """12-EDO reproduces standard pitch."""
        assert edo_table.freq[69] == pytest.approx(440.0)
        assert edo_table.freq[72] == pytest.approx(2 * 261.6255653005986)

    def test_mixed_notations(self) -> None:
        """Any notation can be a degree."""
        table = build_tuning_table(["200", "1,25", "7\\12", "1,875", "2/1"])
        assert table.tuning_data[2] == 1.25
        assert table.tuning_data[4] == 1.875
        assert table.freq[74] == 880.0

    def test_period_number_degree_is_cents(self) -> None:
        """A degree with a period is read as cents, not as a ratio."""
        table = build_tuning_table(["701.955", "1200.0"])
        assert table.tuning_data[1] == pytest.approx(1.5, abs=1e-6)
        assert table.tuning_data[2] == 2.0
        assert table.freq[71] == 880.0

    def test_lines_are_cleaned(self) -> None:
        """Whitespace is stripped and blank lines skipped."""
        table = build_tuning_table(["  3/2 ", "", "   ", "2/1"])
        assert table.scale_data == ("1/1", "3/2", "2/1")

    def test_base_note_zero(self) -> None:
        """The base note can sit at the bottom of the keyboard."""
        table = build_tuning_table(["2/1"], base_frequency=8.0, base_midi_note=0)
        assert table.freq[0] == 8.0
        assert table.freq[3] == 64.0

    def test_no_lines(self, empty_table: TuningTable) -> None:
        """Without lines there is no tuning data."""
        assert empty_table.note_count == 1
        assert all(f is None for f in empty_table.freq)
        assert empty_table.cents == ()
        assert not empty_table.has_tuning_data

    def test_invalid_line(self) -> None:
        """Unparsable lines fail the build."""
        with pytest.raises(InvalidLineError):
            build_tuning_table(["9/8", "nonsense", "2/1"])


class TestTuningTableModel:
    """Tests for TuningTable validation."""

    def test_frozen(self, just_table: TuningTable) -> None:
        """Tables are read-only snapshots."""
        with pytest.raises(ValidationError):
            just_table.base_frequency = 441.0  # type: ignore[misc]

    def test_base_note_range(self) -> None:
        """Base MIDI note must be 0-127."""
        with pytest.raises(ValidationError):
            TuningTable(base_midi_note=128)

    def test_base_frequency_positive(self) -> None:
        """Base frequency must be positive."""
        with pytest.raises(ValidationError):
            TuningTable(base_frequency=0)

    def test_defaults_have_no_data(self) -> None:
        """A default table cannot be exported."""
        assert not TuningTable().has_tuning_data
