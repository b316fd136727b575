"""
Tests for the Korg 'logue tuning exporter.

Tests cover:
- Reference pitches and base offset
- Scale and octave cents tables
- Binary entry encoding
- Descriptor XML
- Archive assembly
"""

import base64
import io
import logging
import xml.etree.ElementTree as ET
import zipfile

import pytest

from chuk_mcp_tuning.errors import ArchiveAssemblyError, NoTuningDataError
from chuk_mcp_tuning.exporters import mnlgtun
from chuk_mcp_tuning.exporters.mnlgtun import (
    MNLG_REFERENCE,
    assemble_mnlgtun_archive,
    base_offset,
    build_mnlg_cents_table,
    cents_table_to_mnlg_binary,
    cents_to_mnlg_entry,
    export_mnlgtun,
    find_reference,
    mnlg_file_info_xml,
    mnlg_tuning_info_xml,
)
from chuk_mcp_tuning.exporters.sink import ZIP_MIME_TYPE
from chuk_mcp_tuning.models.tuning import TuningTable


def _table_with_cents(count: int) -> TuningTable:
    """A table at A4 = 440 Hz whose cents list has count entries."""
    return TuningTable(
        freq=(440.0,) * 128,
        cents=tuple(float(i) for i in range(count)),
        filename="raw",
    )


class TestReference:
    """Tests for reference pitches."""

    def test_reference_table(self) -> None:
        """C4 to B4 with offsets in cents above MIDI note 0."""
        assert len(MNLG_REFERENCE) == 12
        assert MNLG_REFERENCE["c"].offset == 6000
        assert MNLG_REFERENCE["a"].offset == 6900
        assert MNLG_REFERENCE["a"].freq == 440.0
        assert MNLG_REFERENCE["c#"].offset == 6100

    def test_find_reference(self) -> None:
        """Closest pitch by frequency."""
        assert find_reference(440.0).name == "a"
        assert find_reference(445.0).name == "a"
        assert find_reference(261.6255653005986).name == "c"

    def test_far_frequencies_still_match(self) -> None:
        """Out of range frequencies pick the nearest end."""
        assert find_reference(20.0).name == "c"
        assert find_reference(10000.0).name == "b"

    def test_base_offset(self) -> None:
        """Reference offset plus rounded cents."""
        assert base_offset(440.0) == 6900
        assert base_offset(261.6255653005986) == 6000
        assert base_offset(440.0 * 2 ** (10.6 / 1200)) == 6911


class TestCentsTable:
    """Tests for build_mnlg_cents_table."""

    def test_scale_values(self) -> None:
        """Cents are shifted by the base offset."""
        table = build_mnlg_cents_table(_table_with_cents(128), use_scale_format=True)
        assert len(table.values) == 128
        assert table.values[0] == 6900.0
        assert table.values[127] == 7027.0
        assert not table.padded

    def test_scale_truncates(self) -> None:
        """Long tables are cut to 128 values."""
        table = build_mnlg_cents_table(_table_with_cents(130), use_scale_format=True)
        assert len(table.values) == 128
        assert table.padding == 0

    def test_scale_pads(self, caplog: pytest.LogCaptureFixture) -> None:
        """Short tables are padded with zeros and the padding reported."""
        with caplog.at_level(logging.WARNING):
            table = build_mnlg_cents_table(_table_with_cents(100), use_scale_format=True)
        assert len(table.values) == 128
        assert table.padding == 28
        assert table.padded
        assert table.values[99] == 6999.0
        assert table.values[100:] == (0.0,) * 28
        assert "padding" in caplog.text

    def test_octave(self, edo_table: TuningTable) -> None:
        """Twelve offsets above C from the base note's octave."""
        table = build_mnlg_cents_table(edo_table, use_scale_format=False)
        assert len(table.values) == 12
        assert table.values == pytest.approx([100.0 * i for i in range(12)])
        assert table.padding == 0

    def test_octave_just(self, just_table: TuningTable) -> None:
        """Octave values are folded into one octave above C."""
        table = build_mnlg_cents_table(just_table, use_scale_format=False)
        assert len(table.values) == 12
        assert all(0 <= value < 1200 for value in table.values)
        # MIDI 69 is A at 440 Hz
        assert table.values[9] == pytest.approx(900.0)


class TestBinary:
    """Tests for the binary encoding."""

    def test_whole_semitone(self) -> None:
        """Semitone byte then a zero fraction."""
        assert cents_to_mnlg_entry(6900.0) == bytes([69, 0x00, 0x00])

    def test_half_semitone(self) -> None:
        """Half a semitone is 0x4000."""
        assert cents_to_mnlg_entry(6950.0) == bytes([69, 0x40, 0x00])

    def test_clamps_low(self) -> None:
        """Negative cents become zero."""
        assert cents_to_mnlg_entry(-10.0) == bytes([0, 0, 0])

    def test_clamps_high(self) -> None:
        """The top of the range is 127 + 0x7FFF / 0x8000."""
        assert cents_to_mnlg_entry(20000.0) == bytes([127, 0x7F, 0xFF])

    def test_fraction_carries(self) -> None:
        """A fraction that rounds to a full semitone moves to the next one."""
        assert cents_to_mnlg_entry(6999.9999999) == bytes([70, 0, 0])

    def test_table_length(self) -> None:
        """Three bytes per value."""
        data = cents_table_to_mnlg_binary([0.0] * 128)
        assert len(data) == 384
        assert cents_table_to_mnlg_binary([]) == b""


class TestDescriptors:
    """Tests for the XML descriptors."""

    def test_scale_info(self) -> None:
        """Programmer and comment."""
        root = ET.fromstring(mnlg_tuning_info_xml(True, "ScaleWorkshop", "my tuning"))
        assert root.tag == "minilogue_TuneScaleInformation"
        assert root.findtext("Programmer") == "ScaleWorkshop"
        assert root.findtext("Comment") == "my tuning"

    def test_octave_info(self) -> None:
        """Octave dumps use their own root element."""
        root = ET.fromstring(mnlg_tuning_info_xml(False, "ScaleWorkshop", ""))
        assert root.tag == "minilogue_TuneOctInformation"

    def test_comment_is_escaped(self) -> None:
        """Markup in the comment stays text."""
        root = ET.fromstring(mnlg_tuning_info_xml(True, "ScaleWorkshop", "<a & b>"))
        assert root.findtext("Comment") == "<a & b>"

    def test_scale_file_info(self) -> None:
        """File information for a scale dump."""
        root = ET.fromstring(mnlg_file_info_xml(True))
        assert root.tag == "KorgMSLibrarian_Data"
        assert root.findtext("Product") == "minilogue"
        contents = root.find("Contents")
        assert contents is not None
        assert contents.get("NumTuneScaleData") == "1"
        assert contents.get("NumTuneOctData") == "0"
        assert contents.get("NumProgramData") == "0"
        assert contents.findtext("TuneScaleData/Information") == "TunS_000.TunS_info"
        assert contents.findtext("TuneScaleData/TuneScaleBinary") == "TunS_000.TunS_bin"

    def test_octave_file_info(self) -> None:
        """File information for an octave dump."""
        contents = ET.fromstring(mnlg_file_info_xml(False)).find("Contents")
        assert contents is not None
        assert contents.get("NumTuneScaleData") == "0"
        assert contents.get("NumTuneOctData") == "1"
        assert contents.findtext("TuneOctData/TuneOctBinary") == "TunO_000.TunO_bin"


class TestArchive:
    """Tests for archive assembly and export."""

    @pytest.mark.asyncio
    async def test_scale_archive(self, just_table: TuningTable) -> None:
        """Scale archive holds the dump and both descriptors."""
        result = await export_mnlgtun(just_table)
        assert result.filename == "test.mnlgtuns"
        assert result.use_scale_format

        with zipfile.ZipFile(io.BytesIO(result.archive)) as archive:
            assert archive.namelist() == [
                "TunS_000.TunS_bin",
                "TunS_000.TunS_info",
                "FileInformation.xml",
            ]
            data = archive.read("TunS_000.TunS_bin")
            info = ET.fromstring(archive.read("TunS_000.TunS_info"))

        assert len(data) == 384
        # MIDI 69 sits at 69 semitones
        assert data[69 * 3 : 69 * 3 + 3] == bytes([69, 0, 0])
        assert info.findtext("Comment") == "test"

    @pytest.mark.asyncio
    async def test_octave_archive(self, edo_table: TuningTable) -> None:
        """Octave archive holds twelve entries."""
        result = await export_mnlgtun(edo_table, use_scale_format=False)
        assert result.filename == "edo.mnlgtuno"

        with zipfile.ZipFile(io.BytesIO(result.archive)) as archive:
            data = archive.read("TunO_000.TunO_bin")
        assert len(data) == 36
        assert data[:3] == bytes([0, 0, 0])
        assert data[3:6] == bytes([1, 0, 0])

    @pytest.mark.asyncio
    async def test_deterministic(self, just_table: TuningTable) -> None:
        """Same table, same bytes."""
        first = await export_mnlgtun(just_table)
        second = await export_mnlgtun(just_table)
        assert first.archive == second.archive

    @pytest.mark.asyncio
    async def test_base64_and_payload(self, just_table: TuningTable) -> None:
        """The archive is available as base64 and as a payload."""
        result = await export_mnlgtun(just_table)
        assert base64.b64decode(result.base64) == result.archive

        payload = result.to_payload()
        assert payload.filename == "test.mnlgtuns"
        assert payload.mime_type == ZIP_MIME_TYPE
        assert payload.to_bytes() == result.archive

    @pytest.mark.asyncio
    async def test_padding_reported(self) -> None:
        """Short tables still export, with the padding reported."""
        result = await export_mnlgtun(_table_with_cents(100))
        assert result.padding == 28

    @pytest.mark.asyncio
    async def test_no_tuning_data(self, empty_table: TuningTable) -> None:
        """Empty tables are refused."""
        with pytest.raises(NoTuningDataError):
            await export_mnlgtun(empty_table)

    def test_assembly_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Zip errors surface as ArchiveAssemblyError."""

        def fail(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(mnlgtun.zipfile.ZipFile, "writestr", fail)
        with pytest.raises(ArchiveAssemblyError, match="disk full"):
            assemble_mnlgtun_archive({"a": b"data"})
