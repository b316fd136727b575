#!/usr/bin/env python3
"""
Example: Export a scale to every supported format.

This demonstrates the export pipeline - lines to tuning table to files.
Load the results in Scala, a TUN-capable synth, Max/MSP, Pd, Kontakt,
Deflemask or the Korg Sound Librarian.

Usage:
    python examples/export_scale.py
    # Creates: examples/output/just-major.{tun,scl,kbm,...}
"""

import asyncio
from dataclasses import replace
from pathlib import Path

from chuk_mcp_tuning.constants import ExportFormat
from chuk_mcp_tuning.core import invert_chord, line_to_cents, modulo_line, stack_lines
from chuk_mcp_tuning.exporters import export_mnlgtun, export_text, save_payload
from chuk_mcp_tuning.presets import PresetLoader


async def main() -> None:
    """Export the just major preset."""
    output_dir = Path(__file__).parent / "output"

    preset = PresetLoader().get_preset("just-major")
    if preset is None:
        raise SystemExit("just-major preset missing")
    table = preset.to_tuning_table()

    print(f"{preset.name}: {preset.description}")
    for line in preset.lines:
        print(f"  {line:>8}  {line_to_cents(line):9.3f} cents")

    # A little line algebra
    print("\n3/2 + 4/3 =", stack_lines("3/2", "4/3"))
    print("9/4 mod 2/1 =", modulo_line("9/4", "2/1"))
    print("4:5:6 inverted =", invert_chord("4:5:6"))

    print("\nExporting...")
    for fmt in ExportFormat:
        # text formats sharing .txt would overwrite each other
        payload = export_text(table, fmt)
        if payload.filename.endswith(".txt"):
            payload = replace(payload, filename=f"{table.filename}-{fmt.value}.txt")
        print(f"  Created: {save_payload(payload, output_dir)}")

    for use_scale_format in (True, False):
        result = await export_mnlgtun(table, use_scale_format=use_scale_format)
        print(f"  Created: {save_payload(result.to_payload(), output_dir)}")

    print("\nDone!")


if __name__ == "__main__":
    asyncio.run(main())
