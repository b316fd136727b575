"""
Pydantic models for the tuning system.

This module provides:
- TuningTable: per-degree and per-MIDI-note snapshot of a scale
- build_tuning_table: builds a TuningTable from scale lines
- ScalePreset: a scale stored as YAML
"""

from chuk_mcp_tuning.models.preset import ScalePreset
from chuk_mcp_tuning.models.tuning import TuningTable, build_tuning_table

__all__ = [
    "ScalePreset",
    "TuningTable",
    "build_tuning_table",
]
