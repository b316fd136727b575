"""
Exception taxonomy for tuning exports.

Invalid chord syntax and short binary tables are not exceptions:
invert_chord returns None and the mnlgtun exporter pads and reports.
"""

from __future__ import annotations

from chuk_mcp_tuning.constants import ErrorMessages


class TuningError(Exception):
    """Base class for all tuning errors."""


class NoTuningDataError(TuningError):
    """The tuning table has no frequency at its base MIDI note."""

    def __init__(self, message: str = ErrorMessages.NO_TUNING_DATA) -> None:
        super().__init__(message)


class InvalidLineError(TuningError, ValueError):
    """A line could not be converted to a number."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(ErrorMessages.INVALID_LINE.format(line=line))


class ArchiveAssemblyError(TuningError):
    """Packaging the mnlgtun zip archive failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(ErrorMessages.ARCHIVE_FAILED.format(reason=reason))
