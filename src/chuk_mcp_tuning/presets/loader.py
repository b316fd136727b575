"""
Preset loader - discovers and loads scale presets.

Presets can come from:
1. Built-in library (shipped with package)
2. Project presets (user's project/presets directory)
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from chuk_mcp_tuning.models.preset import PresetMetadata, ScalePreset

logger = logging.getLogger(__name__)


class PresetLoader:
    """
    Discovers and loads scale presets.

    Presets are loaded from YAML files in the library and project directories.
    Project presets override library presets with the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the preset loader.

        Args:
            library_path: Path to built-in preset library
            project_path: Path to project presets directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, ScalePreset] = {}

    def list_presets(self) -> list[PresetMetadata]:
        """
        List all available presets, sorted by name.

        Project presets take precedence over library presets.
        """
        presets: dict[str, PresetMetadata] = {}

        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                preset = self._load_preset_file(path)
                if preset:
                    presets[preset.name] = PresetMetadata.from_preset(preset)

        return [presets[name] for name in sorted(presets)]

    def get_preset(self, name: str) -> ScalePreset | None:
        """
        Get a preset by name.

        Project presets take precedence over library presets.

        Args:
            name: Preset name

        Returns:
            ScalePreset if found, None otherwise
        """
        if name in self._cache:
            return self._cache[name]

        for directory in (self.project_path, self.library_path):
            if directory is None:
                continue
            path = directory / f"{name}.yaml"
            if path.exists():
                preset = self._load_preset_file(path)
                if preset:
                    self._cache[name] = preset
                    return preset

        return None

    def _load_preset_file(self, path: Path) -> ScalePreset | None:
        """Load a preset from a YAML file, skipping files that don't validate."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            data.setdefault("name", path.stem)
            return ScalePreset.model_validate(data)
        except (OSError, AttributeError, yaml.YAMLError, ValidationError, ValueError) as e:
            logger.warning(f"Skipping preset {path}: {e}")
            return None

    def clear_cache(self) -> None:
        """Clear the preset cache."""
        self._cache.clear()
