"""
Constants and enums for the tuning system.

No magic strings - use enums for constrained values.
"""

from enum import Enum

APP_TITLE = "CHUK Tuning Workshop"

# Every export covers the full MIDI keyboard
TUNING_MAX_SIZE = 128

# Korg 'logue tuning dumps
MNLG_OCTAVESIZE = 12
MNLG_SCALESIZE = 128
MNLG_MAXCENTS = 1200


class LineType(str, Enum):
    """
    The five notations a scale line can be written in.

    Classification is purely syntactic, see core.lines.get_line_type.
    """

    RATIO = "ratio"  # 3/2
    N_OF_EDO = "n of edo"  # 7\12
    DECIMAL = "decimal"  # ratio a commadecimal denotes; not a line syntax
    COMMADECIMAL = "commadecimal"  # 1,5
    CENTS = "cents"  # 700


class Newline(str, Enum):
    """Line ending used by the text exporters."""

    UNIX = "unix"
    WINDOWS = "windows"

    @property
    def chars(self) -> str:
        """The actual line terminator."""
        return "\r\n" if self is Newline.WINDOWS else "\n"


class ExportFormat(str, Enum):
    """Text export targets."""

    ANAMARK_TUN = "tun"
    SCALA_SCL = "scl"
    SCALA_KBM = "kbm"
    MAXMSP_COLL = "coll"
    PD_TEXT = "pd"
    KONTAKT = "kontakt"
    DEFLEMASK = "deflemask"


class ErrorMessages:
    """Standardized error messages."""

    NO_TUNING_DATA = "No tuning data to export."
    INVALID_LINE = "Invalid line: '{line}'."
    INVALID_CHORD = "Invalid chord: '{chord}'. Expected format like '4:5:6'."
    PRESET_NOT_FOUND = "Preset '{name}' not found."
    UNKNOWN_FORMAT = "Unknown export format: '{fmt}'. Expected one of: {choices}."
    ARCHIVE_FAILED = "Failed to assemble mnlgtun archive: {reason}"
    MISSING_SCALE = "Provide either 'lines' or 'preset'."


class SuccessMessages:
    """Standardized success messages."""

    EXPORTED = "Exported {fmt} to {path}."
    TABLE_BUILT = "Built tuning table with {count} degrees."
