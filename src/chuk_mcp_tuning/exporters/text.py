"""
Text exporters - tuning tables to plain-text file formats.

Every exporter is a pure function of the tuning table and the newline
style. The layouts are fixed templates expected byte for byte by the
consuming software, so they are spelled out literally.

Formats:
- AnaMark TUN (.tun)        http://www.mark-henning.de/files/am/Tuning_File_V2_Doc.pdf
- Scala scale (.scl)        https://www.huygens-fokker.org/scala/scl_format.html
- Scala keyboard map (.kbm)
- Max/MSP coll, Pure Data text, Kontakt script, Deflemask reference (.txt)
"""

from __future__ import annotations

import datetime
from collections.abc import Callable
from dataclasses import dataclass

from chuk_mcp_tuning.constants import APP_TITLE, TUNING_MAX_SIZE, ExportFormat, LineType, Newline
from chuk_mcp_tuning.core.formatting import js_round, number_to_string, to_fixed
from chuk_mcp_tuning.core.lines import decimal_to_cents, get_line_type
from chuk_mcp_tuning.core.pitch import ftom, midi_note_number_to_name, mtof
from chuk_mcp_tuning.errors import NoTuningDataError
from chuk_mcp_tuning.exporters.sink import ExportPayload
from chuk_mcp_tuning.models.tuning import TuningTable

# Deflemask can only pitch notes C#0 to B7
DEFLEMASK_MIN_NOTE = 1
DEFLEMASK_MAX_NOTE = 95


def _require_tuning_data(table: TuningTable) -> None:
    if not table.has_tuning_data:
        raise NoTuningDataError()


def _chars(newline: Newline | str) -> str:
    return Newline(newline).chars


def export_anamark_tun(
    table: TuningTable,
    newline: Newline | str = Newline.UNIX,
    date: datetime.date | None = None,
) -> str:
    """
    AnaMark TUN v2 file, with the legacy VAZ Plus section.

    Args:
        table: The tuning table
        newline: Line ending style
        date: Date written in the [Info] section (default: today in UTC)

    Raises:
        NoTuningDataError: if the base note has no frequency
    """
    _require_tuning_data(table)
    nl = _chars(newline)
    date = date or datetime.datetime.now(datetime.timezone.utc).date()
    reference = mtof(0)

    lines = [
        "; VAZ Plus/AnaMark softsynth tuning file",
        f"; {table.name}",
        ";",
        "; VAZ Plus section",
        "[Tuning]",
    ]
    for i in range(TUNING_MAX_SIZE):
        lines.append(f"note {i}={int(decimal_to_cents(table.freq[i] / reference))}")

    lines += [
        "",
        "; AnaMark section",
        "[Scale Begin]",
        'Format= "AnaMark-TUN"',
        "FormatVersion= 200",
        'FormatSpecs= "http://www.mark-henning.de/eternity/tuningspecs.html"',
        "",
        "[Info]",
        f'Name= "{table.filename}.tun"',
        # AnaMark IDs may not contain whitespace
        f'ID= "{table.filename.replace(" ", "")}.tun"',
        f'Filename= "{table.filename}.tun"',
        f'Description= "{table.description}"',
        f'Date= "{date.isoformat()}"',
        f'Editor= "{APP_TITLE}"',
        "",
        "[Exact Tuning]",
    ]
    for i in range(TUNING_MAX_SIZE):
        lines.append(f"note {i}= {to_fixed(decimal_to_cents(table.freq[i] / reference), 6)}")

    lines += ["", "[Functional Tuning]"]
    for i in range(1, table.note_count):
        cents = to_fixed(decimal_to_cents(table.tuning_data[i]), 6)
        if i == table.note_count - 1:
            lines.append(f'note {i}="#>-{i} % {cents} ~999"')
        else:
            lines.append(f'note {i}="#=0 % {cents}"')

    lines += [
        "",
        "; Set reference key to absolute frequency (not scale note but midi key)",
        f'note {table.base_midi_note}="! {to_fixed(table.base_frequency, 6)}"',
        "[Scale End]",
    ]
    return nl.join(lines) + nl


def _scala_degree(table: TuningTable, index: int) -> str:
    """
    A degree as Scala understands it.

    Scala reads ratios as written and a number with a period as cents, but
    a bare integer as a ratio over 1. Everything but ratios and period-bearing
    cents is therefore written as cents.
    """
    line = table.scale_data[index]
    line_type = get_line_type(line)

    if line_type == LineType.RATIO:
        return line
    if line_type == LineType.CENTS and "." in line:
        return line
    return to_fixed(decimal_to_cents(table.tuning_data[index]), 6)


def export_scala_scl(table: TuningTable, newline: Newline | str = Newline.UNIX) -> str:
    """
    Scala scale file.

    Raises:
        NoTuningDataError: if the base note has no frequency
    """
    _require_tuning_data(table)
    nl = _chars(newline)

    lines = [
        f"! {table.filename}.scl",
        f"! Created using {APP_TITLE}",
        "!",
        table.name or "Untitled tuning",
        f" {table.note_count - 1}",
        "!",
    ]
    for i in range(1, table.note_count):
        lines.append(f" {_scala_degree(table, i)}")
    return nl.join(lines) + nl


def export_scala_kbm(table: TuningTable, newline: Newline | str = Newline.UNIX) -> str:
    """
    Scala keyboard mapping: linear mapping of the scale around the base note.

    Raises:
        NoTuningDataError: if the base note has no frequency
    """
    _require_tuning_data(table)
    nl = _chars(newline)
    size = table.note_count - 1

    lines = [
        "! Template for a keyboard mapping",
        "!",
        "! Size of map. The pattern repeats every so many keys:",
        str(size),
        "! First MIDI note number to retune:",
        "0",
        "! Last MIDI note number to retune:",
        "127",
        "! Middle note where the first entry of the mapping is mapped to:",
        str(table.base_midi_note),
        "! Reference note for which frequency is given:",
        str(table.base_midi_note),
        "! Frequency to tune the above note to",
        number_to_string(table.base_frequency),
        "! Scale degree to consider as formal octave (determines difference in pitch",
        "! between adjacent mapping patterns):",
        str(size),
        "! Mapping.",
        "! The numbers represent scale degrees mapped to keys. The first entry is for",
        "! the given middle note, the next for subsequent higher keys.",
        '! For an unmapped key, put in an "x". At the end, unmapped keys may be left out.',
    ]
    lines += [str(degree) for degree in range(size)]
    return nl.join(lines) + nl


def export_maxmsp_coll(table: TuningTable, newline: Newline | str = Newline.UNIX) -> str:
    """
    Max/MSP coll object contents: 'note, frequency;' for every MIDI note.

    Raises:
        NoTuningDataError: if the base note has no frequency
    """
    _require_tuning_data(table)
    nl = _chars(newline)

    lines = [
        f"# Tuning file for Max/MSP coll objects. - Created using {APP_TITLE}",
        f"# {table.name}",
        "#",
    ]
    for i in range(TUNING_MAX_SIZE):
        lines.append(f"{i}, {to_fixed(table.freq[i], 7)};")
    return nl.join(lines) + nl


def export_pd_text(table: TuningTable, newline: Newline | str = Newline.UNIX) -> str:
    """
    Pure Data text file: one 'frequency;' per MIDI note.

    Raises:
        NoTuningDataError: if the base note has no frequency
    """
    _require_tuning_data(table)
    nl = _chars(newline)
    return "".join(f"{to_fixed(table.freq[i], 7)};{nl}" for i in range(TUNING_MAX_SIZE))


def export_kontakt_script(table: TuningTable, newline: Newline | str = Newline.UNIX) -> str:
    """
    Kontakt KSP script retuning each key to its nearest note plus a bend.

    Keys whose frequency lands outside the MIDI range keep their default
    tuning.

    Raises:
        NoTuningDataError: if the base note has no frequency
    """
    _require_tuning_data(table)
    nl = _chars(newline)
    base_name = midi_note_number_to_name(table.base_midi_note)

    lines = [
        "{**************************************",
        table.name,
        f"MIDI note {table.base_midi_note} ({base_name}) = "
        f"{number_to_string(table.base_frequency)} Hz",
        f"Created using {APP_TITLE}",
        "****************************************}",
        "",
        "on init",
        f"declare %keynum[{TUNING_MAX_SIZE}]",
        f"declare %tune[{TUNING_MAX_SIZE}]",
        "declare $bend",
        "declare $key",
        "",
    ]
    for i in range(TUNING_MAX_SIZE):
        note, cents = ftom(table.freq[i])
        if note < 0 or note >= TUNING_MAX_SIZE:
            lines.append(f"%keynum[{i}] := {i}")
            lines.append(f"%tune[{i}] := 0")
        else:
            # change_tune takes millicents
            lines.append(f"%keynum[{i}] := {note}")
            lines.append(f"%tune[{i}] := {int(cents * 1000)}")

    lines += [
        "end on",
        "",
        "on note",
        "$key := %keynum[$EVENT_NOTE]",
        "$bend := %tune[$EVENT_NOTE]",
        "change_note ($EVENT_ID, $key)",
        "change_tune ($EVENT_ID, $bend, 0)",
        "end on",
    ]
    return nl.join(lines) + nl


def deflemask_note_name(midi_note: int) -> str:
    """Note name as typed into Deflemask: 'A4' -> 'A-4', 'C#4' stays."""
    name = midi_note_number_to_name(midi_note)
    if len(name) == 2:
        return f"{name[0]}-{name[1]}"
    return name


def deflemask_fine_tune(cents: float) -> str:
    """Cents offset as an E5 effect value: -100c = 00, 0c = 80, +100c = FF."""
    return format(js_round(128 + cents * 1.28), "X")


def export_reference_deflemask(table: TuningTable, newline: Newline | str = Newline.UNIX) -> str:
    """
    Human-readable reference for entering the tuning into Deflemask.

    A note 50 cents below A4 reads as 'A-4 xx ... E5 40'. Notes outside
    C#0..B7 are left out.

    Raises:
        NoTuningDataError: if the base note has no frequency
    """
    _require_tuning_data(table)
    nl = _chars(newline)

    lines = [
        table.description,
        f"Reference for Deflemask note input - generated by {APP_TITLE}",
        "",
    ]
    for i in range(TUNING_MAX_SIZE):
        note, cents = ftom(table.freq[i])
        if note < DEFLEMASK_MIN_NOTE or note > DEFLEMASK_MAX_NOTE:
            continue
        lines.append(
            f"[{deflemask_note_name(note)} xx] [xx E5 {deflemask_fine_tune(cents)}]"
            f" ..... {i}: {to_fixed(table.freq[i], 2)} Hz / {to_fixed(table.cents[i], 2)} cents"
        )
    return nl.join(lines) + nl


@dataclass(frozen=True)
class TextExporter:
    """A registered text format: its serializer and file extension."""

    serialize: Callable[..., str]
    extension: str


EXPORTERS: dict[ExportFormat, TextExporter] = {
    ExportFormat.ANAMARK_TUN: TextExporter(export_anamark_tun, ".tun"),
    ExportFormat.SCALA_SCL: TextExporter(export_scala_scl, ".scl"),
    ExportFormat.SCALA_KBM: TextExporter(export_scala_kbm, ".kbm"),
    ExportFormat.MAXMSP_COLL: TextExporter(export_maxmsp_coll, ".txt"),
    ExportFormat.PD_TEXT: TextExporter(export_pd_text, ".txt"),
    ExportFormat.KONTAKT: TextExporter(export_kontakt_script, ".txt"),
    ExportFormat.DEFLEMASK: TextExporter(export_reference_deflemask, ".txt"),
}


def export_text(
    table: TuningTable,
    fmt: ExportFormat | str,
    newline: Newline | str = Newline.UNIX,
) -> ExportPayload:
    """
    Serialize a table to any registered text format.

    Raises:
        ValueError: for an unknown format
        NoTuningDataError: if the base note has no frequency
    """
    exporter = EXPORTERS[ExportFormat(fmt)]
    content = exporter.serialize(table, newline)
    return ExportPayload(filename=f"{table.filename}{exporter.extension}", content=content)
