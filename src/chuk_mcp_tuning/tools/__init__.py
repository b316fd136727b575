"""
MCP tool implementations.

Tools are organized by domain:
- lines - Interval arithmetic and chord inversion
- export - Tuning tables and file export
- presets - Preset discovery
"""

from chuk_mcp_tuning.tools.export import register_export_tools
from chuk_mcp_tuning.tools.lines import register_line_tools
from chuk_mcp_tuning.tools.presets import register_preset_tools

__all__ = [
    "register_export_tools",
    "register_line_tools",
    "register_preset_tools",
]
