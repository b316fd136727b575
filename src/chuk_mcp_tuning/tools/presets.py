"""
Preset tools - MCP tools for preset discovery.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tuning.constants import ErrorMessages
from chuk_mcp_tuning.core import line_to_cents
from chuk_mcp_tuning.presets import PresetLoader

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_preset_tools(mcp: ChukMCPServer, preset_loader: PresetLoader) -> dict[str, Any]:
    """
    Register preset tools with the MCP server.

    Args:
        mcp: The MCP server instance
        preset_loader: The preset loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_list_presets() -> str:
        """
        List available scale presets.

        Returns:
            JSON string with list of preset summaries

        Example:
            tuning_list_presets()
        """
        try:
            presets = preset_loader.list_presets()
            return json.dumps(
                {
                    "status": "success",
                    "presets": [p.model_dump() for p in presets],
                    "count": len(presets),
                }
            )
        except Exception as e:
            logger.exception("Failed to list presets")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_list_presets"] = tuning_list_presets

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_describe_preset(name: str) -> str:
        """
        Get the lines and base note of a preset.

        Args:
            name: Preset name

        Returns:
            JSON string with preset details, including each degree in cents

        Example:
            tuning_describe_preset(name="just-major")
        """
        try:
            preset = preset_loader.get_preset(name)
            if preset is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.PRESET_NOT_FOUND.format(name=name)}
                )

            return json.dumps(
                {
                    "status": "success",
                    "preset": {
                        **preset.model_dump(),
                        "cents": [line_to_cents(line) for line in preset.lines],
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to describe preset")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_describe_preset"] = tuning_describe_preset

    return tools
