"""
Tests for line algebra.

Tests cover:
- stack_lines / stack_ratios / stack_n_of_edos
- stack_self
- modulo_line
- invert_chord
"""

import logging

import pytest

from chuk_mcp_tuning.constants import LineType
from chuk_mcp_tuning.core.algebra import (
    invert_chord,
    modulo_line,
    stack_lines,
    stack_n_of_edos,
    stack_ratios,
    stack_self,
)
from chuk_mcp_tuning.core.lines import get_line_type, line_to_cents


class TestStackLines:
    """Tests for stack_lines."""

    def test_ratios_multiply(self) -> None:
        """Ratio + ratio is a reduced ratio."""
        assert stack_lines("3/2", "4/3") == "2/1"
        assert stack_lines("9/8", "9/8") == "81/64"
        assert stack_ratios("6/4", "1/1") == "3/2"

    def test_edos_add(self) -> None:
        """EDO steps are added over the LCM of their divisions."""
        assert stack_lines("1\\2", "1\\3") == "5\\6"
        assert stack_lines("7\\12", "5\\12") == "1\\1"
        assert stack_n_of_edos("4\\12", "1\\12") == "5\\12"

    @pytest.mark.parametrize(
        ("line1", "line2", "line_type"),
        [("5/4", "6/5", LineType.RATIO), ("2\\19", "3\\31", LineType.N_OF_EDO)],
    )
    def test_notation_preserved(self, line1: str, line2: str, line_type: LineType) -> None:
        """Same-notation operands keep their notation."""
        assert get_line_type(stack_lines(line1, line2)) == line_type

    def test_commadecimal_first_operand(self) -> None:
        """A commadecimal first operand gives a commadecimal product."""
        assert stack_lines("1,5", "1,5") == "2,25"
        assert get_line_type(stack_lines("1,5", "2/1")) == LineType.COMMADECIMAL

    def test_large_commadecimal_product(self) -> None:
        """Products too large for plain repr stay commadecimals."""
        result = stack_lines("10000000000,0", "1000000,0")
        assert result == "10000000000000000,0"
        assert get_line_type(result) == LineType.COMMADECIMAL

    def test_mixed_in_cents(self) -> None:
        """Other combinations are summed in cents."""
        assert stack_lines("700", "500") == "1200.000000"
        assert stack_lines("2/1", "100") == "1300.000000"
        assert stack_lines("7\\12", "1,5") == "1401.955001"
        assert stack_lines("701.955", "2/1") == "1901.955000"

    @pytest.mark.parametrize(
        ("line1", "line2"),
        [
            ("700", "3/2"),
            ("701.955", "2/1"),
            ("7\\12", "386.3137"),
            ("1,5", "2/1"),
            ("386.3137", "315.641287"),
        ],
    )
    def test_cents_add(self, line1: str, line2: str) -> None:
        """The stacked interval is the sum of its parts in cents."""
        result = stack_lines(line1, line2)
        assert line_to_cents(result) == pytest.approx(
            line_to_cents(line1) + line_to_cents(line2), abs=1e-6
        )


class TestStackSelf:
    """Tests for stack_self."""

    def test_ratio_powers(self) -> None:
        """Whole powers keep ratio notation."""
        assert stack_self("3/2", 0) == "1/1"
        assert stack_self("3/2", 1) == "3/2"
        assert stack_self("3/2", 2) == "9/4"
        assert stack_self("3/2", -2) == "4/9"

    def test_ratio_powers_reduced(self) -> None:
        """Unreduced ratios give reduced powers."""
        assert stack_self("6/4", 2) == "9/4"
        assert stack_self("6/4", -1) == "2/3"
        assert stack_self("4/2", 3) == "8/1"

    def test_edo_multiples(self) -> None:
        """EDO degree is multiplied."""
        assert stack_self("7\\12", 0) == "0\\12"
        assert stack_self("7\\12", 3) == "21\\12"
        assert stack_self("7\\12", -1) == "-7\\12"

    def test_commadecimal_powers(self) -> None:
        """Commadecimal powers are written with a comma."""
        assert stack_self("1,5", 2) == "2,25"
        assert stack_self("2,0", 0) == "1,0"

    def test_period_number_is_cents(self) -> None:
        """A number with a period scales in cents."""
        assert stack_self("700.5", 1) == "1401.000000"

    def test_fallback_in_cents(self) -> None:
        """Other lines and fractional powers scale cents by (1 + k)."""
        assert stack_self("100", 2) == "300.000000"
        assert stack_self("100", 0.5) == "150.000000"


class TestModuloLine:
    """Tests for modulo_line."""

    def test_ratio_reduction(self) -> None:
        """Ratios are reduced by whole periods."""
        assert modulo_line("9/4", "2/1") == "9/8"
        assert modulo_line("5/1", "2/1") == "5/4"
        assert modulo_line("3/2", "2/1") == "3/2"

    def test_ratio_tritave(self) -> None:
        """Non-octave periods work the same way."""
        assert modulo_line("5/1", "3/1") == "5/3"

    def test_edo_reduction(self) -> None:
        """EDO steps are reduced over the LCM of the divisions."""
        assert modulo_line("14\\12", "12\\12") == "2\\12"
        assert modulo_line("3\\6", "1\\4") == "0\\12"

    def test_edo_modulo_octave(self) -> None:
        """An EDO step reduced by an octave in any notation stays an EDO step."""
        assert modulo_line("14\\12", "2/1") == "2\\12"
        assert modulo_line("-1\\12", "2/1") == "11\\12"
        assert modulo_line("19\\12", "1200") == "7\\12"
        assert modulo_line("31\\31", "2,0") == "0\\31"

    def test_edo_modulo_other_period(self) -> None:
        """Non-octave periods reduce EDO steps in cents."""
        assert modulo_line("14\\12", "3/1") == "1400.000000"

    def test_cents_reduction(self) -> None:
        """Mixed notations are reduced in cents."""
        assert modulo_line("1300", "1200") == "100.000000"
        assert modulo_line("-100", "2/1") == "1100.000000"
        assert modulo_line("1300.5", "1200") == "100.500000"


class TestInvertChord:
    """Tests for invert_chord."""

    def test_triad(self) -> None:
        """Major triad inverts to the minor triad."""
        assert invert_chord("4:5:6") == "10:12:15"

    def test_tetrad(self) -> None:
        """Longer chords."""
        assert invert_chord("4:5:6:7") == "60:70:84:105"

    def test_dyad(self) -> None:
        """A single interval inverts to itself."""
        assert invert_chord("2:3") == "2:3"

    @pytest.mark.parametrize("chord", ["4", "4:5:", "a:b", "4-5-6", "", "4:0:6", "0:4", "4:5:00"])
    def test_invalid_returns_none(self, chord: str, caplog: pytest.LogCaptureFixture) -> None:
        """Malformed chords return None and log a warning."""
        with caplog.at_level(logging.WARNING):
            assert invert_chord(chord) is None
        assert "Invalid chord" in caplog.text
