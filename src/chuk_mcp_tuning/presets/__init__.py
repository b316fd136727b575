"""
Scale presets - well-known tunings stored as YAML.
"""

from chuk_mcp_tuning.presets.loader import PresetLoader

__all__ = ["PresetLoader"]
