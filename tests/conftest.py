"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_tuning.models.tuning import TuningTable, build_tuning_table


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def just_table() -> TuningTable:
    """Three-degree just scale at A4 = 440 Hz."""
    return build_tuning_table(
        ["9/8", "5/4", "2/1"],
        base_frequency=440.0,
        base_midi_note=69,
        name="Test scale",
        filename="test",
        description="A small just scale",
    )


@pytest.fixture
def edo_table() -> TuningTable:
    """12-EDO anchored at middle C."""
    return build_tuning_table(
        [f"{degree}\\12" for degree in range(1, 13)],
        base_frequency=261.6255653005986,
        base_midi_note=60,
        name="12-EDO",
        filename="edo",
    )


@pytest.fixture
def empty_table() -> TuningTable:
    """A table built without any lines."""
    return build_tuning_table([], filename="empty")
