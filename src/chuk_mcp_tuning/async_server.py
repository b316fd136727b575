#!/usr/bin/env python3
"""
Async Tuning MCP Server using chuk-mcp-server

This server provides MCP tools for microtonal scales. Scales are lists of
lines; the last line is the period the scale repeats by.

The server provides tools for:
- Classifying lines and converting them to cents
- Stacking, reducing and inverting intervals
- Building 128-note tuning tables
- Exporting to AnaMark, Scala, Max/MSP, Pd, Kontakt, Deflemask and Korg 'logue files
- Preset discovery
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_tuning.presets import PresetLoader
from chuk_mcp_tuning.tools import (
    register_export_tools,
    register_line_tools,
    register_preset_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

mcp = ChukMCPServer("chuk-mcp-tuning")

BASE_PATH = Path.cwd()
PRESETS_DIR = BASE_PATH / "presets"
OUTPUT_DIR = BASE_PATH / "output"
LIBRARY_PATH = Path(__file__).parent / "presets" / "library"

preset_loader = PresetLoader(
    library_path=LIBRARY_PATH,
    project_path=PRESETS_DIR,
)

line_tools = register_line_tools(mcp)
export_tools = register_export_tools(mcp, preset_loader, OUTPUT_DIR)
preset_tools = register_preset_tools(mcp, preset_loader)

# Export tool functions for direct access
tuning_line_info = line_tools["tuning_line_info"]
tuning_stack_lines = line_tools["tuning_stack_lines"]
tuning_stack_self = line_tools["tuning_stack_self"]
tuning_modulo_line = line_tools["tuning_modulo_line"]
tuning_invert_chord = line_tools["tuning_invert_chord"]
tuning_prime_factors = line_tools["tuning_prime_factors"]

tuning_build_table = export_tools["tuning_build_table"]
tuning_export = export_tools["tuning_export"]
tuning_export_mnlgtun = export_tools["tuning_export_mnlgtun"]

tuning_list_presets = preset_tools["tuning_list_presets"]
tuning_describe_preset = preset_tools["tuning_describe_preset"]

logger.info("CHUK Tuning MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Presets dir: {PRESETS_DIR}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
