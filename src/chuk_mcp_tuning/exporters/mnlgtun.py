"""
Korg 'logue tuning export (.mnlgtuns / .mnlgtuno).

The Sound Librarian for the minilogue xd, prologue and NTS-1 reads zip
archives holding a binary tuning dump plus two small XML descriptors.
Two dump flavours exist:

- scale: all 128 MIDI notes retuned individually
- octave: 12 offsets repeated over every octave

Each note is stored as cents above MIDI note 0 (C-1, 8.18 Hz). The Sound
Librarian truncates these to whole cents on import.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging
import struct
import xml.etree.ElementTree as ET
import zipfile
from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_tuning.constants import MNLG_MAXCENTS, MNLG_OCTAVESIZE, MNLG_SCALESIZE
from chuk_mcp_tuning.core.formatting import js_round
from chuk_mcp_tuning.core.lines import decimal_to_cents
from chuk_mcp_tuning.core.numbers import clamp, math_modulo
from chuk_mcp_tuning.core.pitch import PitchClass, mtof
from chuk_mcp_tuning.errors import ArchiveAssemblyError, NoTuningDataError
from chuk_mcp_tuning.exporters.sink import ZIP_MIME_TYPE, ExportPayload
from chuk_mcp_tuning.models.tuning import TuningTable

logger = logging.getLogger(__name__)

PROGRAMMER = "ScaleWorkshop"
PRODUCT = "minilogue"
ARCHIVE_DATE_TIME = (1980, 1, 1, 0, 0, 0)

# One entry: semitone byte, then a big-endian fraction of a semitone
_ENTRY = struct.Struct(">BH")
MNLG_MAX_SEMITONE = 127
MNLG_FRACTION_SCALE = 0x8000
MNLG_MAX_FRACTION = 0x7FFF


@dataclass(frozen=True)
class ReferencePitch:
    """A pitch with a known offset (cents above MIDI note 0)."""

    name: str
    offset: int
    freq: float


# C4..B4 in 12-EDO at A4 = 440 Hz
MNLG_REFERENCE: dict[str, ReferencePitch] = {
    pitch.spell().lower(): ReferencePitch(
        name=pitch.spell().lower(),
        offset=pitch.to_midi(4) * 100,
        freq=mtof(pitch.to_midi(4)),
    )
    for pitch in PitchClass
}
REFERENCE_C = MNLG_REFERENCE["c"]


@dataclass(frozen=True)
class MnlgCentsTable:
    """Cents values ready for encoding, and how many zeros were padded on."""

    values: tuple[float, ...]
    padding: int = 0

    @property
    def padded(self) -> bool:
        return self.padding > 0


@dataclass(frozen=True)
class MnlgtunExport:
    """Result of a mnlgtun export."""

    filename: str
    archive: bytes
    use_scale_format: bool
    padding: int = 0

    @property
    def base64(self) -> str:
        """The archive as base64 text."""
        return base64.b64encode(self.archive).decode("ascii")

    def to_payload(self) -> ExportPayload:
        return ExportPayload(filename=self.filename, content=self.archive, mime_type=ZIP_MIME_TYPE)


def _file_names(use_scale_format: bool) -> tuple[str, str]:
    """(archive member prefix, file extension)."""
    if use_scale_format:
        return "TunS_000.TunS_", ".mnlgtuns"
    return "TunO_000.TunO_", ".mnlgtuno"


def find_reference(frequency: float) -> ReferencePitch:
    """The reference pitch closest to frequency in Hz. Never fails."""
    return min(MNLG_REFERENCE.values(), key=lambda ref: abs(frequency - ref.freq))


def base_offset(base_frequency: float) -> int:
    """Cents above MIDI note 0 of base_frequency, rounded to whole cents."""
    reference = find_reference(base_frequency)
    return reference.offset + js_round(decimal_to_cents(base_frequency / reference.freq))


def build_mnlg_cents_table(table: TuningTable, use_scale_format: bool) -> MnlgCentsTable:
    """
    Cents table for the dump, anchored at the base frequency.

    Scale format keeps exactly 128 values. A shorter table means the tuning
    table was built wrongly upstream; it is padded with zeros and the
    padding is logged and reported.

    Octave format keeps the 12 notes from the C at or below the base note,
    folded into one octave above C.
    """
    offset = base_offset(table.base_frequency)
    cents = [value + offset for value in table.cents]

    if use_scale_format:
        cents = cents[:MNLG_SCALESIZE]
        padding = MNLG_SCALESIZE - len(cents)
        if padding:
            logger.warning(
                f"mnlgtun table has {len(cents)} values instead of {MNLG_SCALESIZE}, "
                f"padding the end with {padding} zeros"
            )
            cents += [0.0] * padding
        return MnlgCentsTable(values=tuple(cents), padding=padding)

    c_note = (table.base_midi_note // MNLG_OCTAVESIZE) * MNLG_OCTAVESIZE
    octave = [
        math_modulo(value - REFERENCE_C.offset, MNLG_MAXCENTS)
        for value in cents[c_note : c_note + MNLG_OCTAVESIZE]
    ]
    return MnlgCentsTable(values=tuple(octave))


def cents_to_mnlg_entry(cents: float) -> bytes:
    """
    Encode one value: semitone index, then the remainder as a 16 bit fraction.

    Values are clamped to what the format can hold.
    """
    semitones = clamp(0.0, MNLG_MAX_SEMITONE + MNLG_MAX_FRACTION / MNLG_FRACTION_SCALE, cents / 100)
    semitone = int(semitones)
    fraction = js_round((semitones - semitone) * MNLG_FRACTION_SCALE)

    if fraction >= MNLG_FRACTION_SCALE:
        if semitone < MNLG_MAX_SEMITONE:
            semitone += 1
            fraction = 0
        else:
            fraction = MNLG_MAX_FRACTION
    return _ENTRY.pack(semitone, fraction)


def cents_table_to_mnlg_binary(cents_table: Sequence[float]) -> bytes:
    """Binary dump of a cents table, three bytes per entry."""
    return b"".join(cents_to_mnlg_entry(cents) for cents in cents_table)


def mnlg_tuning_info_xml(use_scale_format: bool, programmer: str, comment: str) -> str:
    """The *_info member: who made the tuning and a comment."""
    root_name = "minilogue_TuneScaleInformation" if use_scale_format else "minilogue_TuneOctInformation"
    root = ET.Element(root_name)
    ET.SubElement(root, "Programmer").text = programmer
    ET.SubElement(root, "Comment").text = comment
    return ET.tostring(root, encoding="unicode")


def mnlg_file_info_xml(use_scale_format: bool, product: str = PRODUCT) -> str:
    """FileInformation.xml: what the archive contains."""
    prefix, _ = _file_names(use_scale_format)
    data_name, binary_name = (
        ("TuneScaleData", "TuneScaleBinary") if use_scale_format else ("TuneOctData", "TuneOctBinary")
    )

    root = ET.Element("KorgMSLibrarian_Data")
    ET.SubElement(root, "Product").text = product
    contents = ET.SubElement(
        root,
        "Contents",
        {
            "NumProgramData": "0",
            "NumPresetInformation": "0",
            "NumTuneScaleData": str(int(use_scale_format)),
            "NumTuneOctData": str(int(not use_scale_format)),
        },
    )
    tune_data = ET.SubElement(contents, data_name)
    ET.SubElement(tune_data, "Information").text = prefix + "info"
    ET.SubElement(tune_data, binary_name).text = prefix + "bin"
    return ET.tostring(root, encoding="unicode")


def assemble_mnlgtun_archive(members: dict[str, bytes | str]) -> bytes:
    """
    Zip the archive members.

    Raises:
        ArchiveAssemblyError: if compression or writing fails
    """
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, data in members.items():
                # fixed timestamp: same table -> same archive bytes
                info = zipfile.ZipInfo(name, date_time=ARCHIVE_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                archive.writestr(info, data)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise ArchiveAssemblyError(str(e)) from e
    return buffer.getvalue()


async def export_mnlgtun(table: TuningTable, use_scale_format: bool = True) -> MnlgtunExport:
    """
    Export a tuning table as a 'logue tuning archive.

    Args:
        table: The tuning table
        use_scale_format: True for a 128 note scale dump, False for 12 note octave

    Returns:
        MnlgtunExport with the zip archive

    Raises:
        NoTuningDataError: if the base note has no frequency
        ArchiveAssemblyError: if the archive cannot be assembled
    """
    if not table.has_tuning_data:
        raise NoTuningDataError()

    cents_table = build_mnlg_cents_table(table, use_scale_format)
    prefix, extension = _file_names(use_scale_format)

    members: dict[str, bytes | str] = {
        prefix + "bin": cents_table_to_mnlg_binary(cents_table.values),
        prefix + "info": mnlg_tuning_info_xml(use_scale_format, PROGRAMMER, table.filename),
        "FileInformation.xml": mnlg_file_info_xml(use_scale_format),
    }
    archive = await asyncio.to_thread(assemble_mnlgtun_archive, members)

    logger.debug(f"Assembled {prefix}bin archive, {len(archive)} bytes")
    return MnlgtunExport(
        filename=table.filename + extension,
        archive=archive,
        use_scale_format=use_scale_format,
        padding=cents_table.padding,
    )
