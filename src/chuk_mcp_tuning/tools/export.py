"""
Export tools - MCP tools for building tuning tables and writing files.

Every tool takes either explicit scale lines or the name of a preset.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_tuning.constants import ErrorMessages, ExportFormat, Newline, SuccessMessages
from chuk_mcp_tuning.errors import ArchiveAssemblyError, NoTuningDataError
from chuk_mcp_tuning.exporters import export_mnlgtun, export_text, save_payload
from chuk_mcp_tuning.models.tuning import TuningTable, build_tuning_table
from chuk_mcp_tuning.presets import PresetLoader

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


class ScaleRequestError(ValueError):
    """The tool call did not describe a scale."""


def register_export_tools(
    mcp: ChukMCPServer,
    preset_loader: PresetLoader,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register tuning table and export tools with the MCP server.

    Args:
        mcp: The MCP server instance
        preset_loader: The preset loader
        output_dir: Directory for output files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    def resolve_table(
        lines: list[str] | None,
        preset: str | None,
        base_frequency: float | None,
        base_midi_note: int | None,
        name: str | None,
        filename: str | None,
        description: str | None,
    ) -> TuningTable:
        """Build a table from lines, or from a preset with optional overrides."""
        if lines is not None:
            return build_tuning_table(
                lines,
                base_frequency=base_frequency or 440.0,
                base_midi_note=69 if base_midi_note is None else base_midi_note,
                name=name or "",
                filename=filename or name or "tuning",
                description=description or "",
            )

        if preset is None:
            raise ScaleRequestError(ErrorMessages.MISSING_SCALE)
        scale = preset_loader.get_preset(preset)
        if scale is None:
            raise ScaleRequestError(ErrorMessages.PRESET_NOT_FOUND.format(name=preset))

        return build_tuning_table(
            scale.lines,
            base_frequency=base_frequency or scale.base_frequency,
            base_midi_note=scale.base_midi_note if base_midi_note is None else base_midi_note,
            name=name or scale.name,
            filename=filename or scale.name,
            description=scale.description if description is None else description,
        )

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_build_table(
        lines: list[str] | None = None,
        preset: str | None = None,
        base_frequency: float | None = None,
        base_midi_note: int | None = None,
    ) -> str:
        """
        Build a tuning table and return its frequencies.

        Args:
            lines: Scale degrees without the unison, e.g. ["9/8", "5/4", "2/1"]
            preset: Preset name, used when lines is not given
            base_frequency: Frequency of the base note in Hz (default 440)
            base_midi_note: MIDI note of the unison (default 69)

        Returns:
            JSON string with degrees, cents and the frequency of every MIDI note

        Example:
            tuning_build_table(lines=["9/8", "5/4", "2/1"], base_frequency=440)
        """
        try:
            table = resolve_table(lines, preset, base_frequency, base_midi_note, None, None, None)
            if not table.has_tuning_data:
                raise NoTuningDataError()

            return json.dumps(
                {
                    "status": "success",
                    "note_count": table.note_count,
                    "base_midi_note": table.base_midi_note,
                    "base_frequency": table.base_frequency,
                    "degrees": [
                        {"line": line, "decimal": decimal}
                        for line, decimal in zip(table.scale_data, table.tuning_data)
                    ],
                    "freq": list(table.freq),
                    "message": SuccessMessages.TABLE_BUILT.format(count=table.note_count - 1),
                }
            )
        except (ValueError, NoTuningDataError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to build tuning table")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_build_table"] = tuning_build_table

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_export(
        format: str,
        lines: list[str] | None = None,
        preset: str | None = None,
        base_frequency: float | None = None,
        base_midi_note: int | None = None,
        name: str | None = None,
        filename: str | None = None,
        description: str | None = None,
        newline: str = Newline.UNIX.value,
    ) -> str:
        """
        Export a scale to a text tuning format.

        Formats: tun (AnaMark), scl / kbm (Scala), coll (Max/MSP),
        pd (Pure Data), kontakt (KSP script), deflemask (reference text).

        Args:
            format: Export format
            lines: Scale degrees without the unison
            preset: Preset name, used when lines is not given
            base_frequency: Frequency of the base note in Hz
            base_midi_note: MIDI note of the unison
            name: Scale title written into the file
            filename: Output file name without extension
            description: Description written into the file
            newline: 'unix' or 'windows'

        Returns:
            JSON string with the written file path

        Example:
            tuning_export(format="scl", preset="just-major")
        """
        try:
            fmt = ExportFormat(format)
        except ValueError:
            choices = ", ".join(f.value for f in ExportFormat)
            return json.dumps(
                {
                    "status": "error",
                    "message": ErrorMessages.UNKNOWN_FORMAT.format(fmt=format, choices=choices),
                }
            )

        try:
            table = resolve_table(
                lines, preset, base_frequency, base_midi_note, name, filename, description
            )
            payload = export_text(table, fmt, Newline(newline))
            path = save_payload(payload, output_dir)

            return json.dumps(
                {
                    "status": "success",
                    "path": str(path),
                    "format": fmt.value,
                    "message": SuccessMessages.EXPORTED.format(fmt=fmt.value, path=path),
                }
            )
        except (ValueError, NoTuningDataError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to export tuning")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_export"] = tuning_export

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_export_mnlgtun(
        lines: list[str] | None = None,
        preset: str | None = None,
        base_frequency: float | None = None,
        base_midi_note: int | None = None,
        filename: str | None = None,
        octave: bool = False,
    ) -> str:
        """
        Export a scale for Korg 'logue synths (minilogue xd, prologue, NTS-1).

        Writes a .mnlgtuns (128 note scale) or .mnlgtuno (12 note octave)
        archive for the Sound Librarian.

        Args:
            lines: Scale degrees without the unison
            preset: Preset name, used when lines is not given
            base_frequency: Frequency of the base note in Hz
            base_midi_note: MIDI note of the unison
            filename: Output file name without extension
            octave: True for the 12 note octave format

        Returns:
            JSON string with the written file path

        Example:
            tuning_export_mnlgtun(preset="12-edo")
        """
        try:
            table = resolve_table(
                lines, preset, base_frequency, base_midi_note, None, filename, None
            )
            result = await export_mnlgtun(table, use_scale_format=not octave)
            path = save_payload(result.to_payload(), output_dir)

            response: dict[str, Any] = {
                "status": "success",
                "path": str(path),
                "format": "mnlgtuno" if octave else "mnlgtuns",
                "bytes": len(result.archive),
            }
            if result.padding:
                response["warning"] = f"Table padded with {result.padding} zeros"
            return json.dumps(response)
        except (ValueError, NoTuningDataError, ArchiveAssemblyError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to export mnlgtun")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_export_mnlgtun"] = tuning_export_mnlgtun

    return tools
