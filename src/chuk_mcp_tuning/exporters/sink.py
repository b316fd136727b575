"""
Save sink - where finished export payloads end up.

Exporters never touch the file system. They return an ExportPayload and
the caller decides how to persist or offer it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TEXT_MIME_TYPE = "application/octet-stream"
ZIP_MIME_TYPE = "application/zip"


@dataclass(frozen=True)
class ExportPayload:
    """A finished export: file name, contents and MIME type."""

    filename: str
    content: str | bytes
    mime_type: str = TEXT_MIME_TYPE

    def to_bytes(self) -> bytes:
        """Contents as bytes. Text is UTF-8 with line endings untouched."""
        if isinstance(self.content, bytes):
            return self.content
        return self.content.encode("utf-8")


def save_payload(payload: ExportPayload, output_dir: Path) -> Path:
    """
    Write a payload into output_dir, creating it if needed.

    Returns:
        Path of the written file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / payload.filename
    path.write_bytes(payload.to_bytes())
    logger.info(f"Saved {payload.filename} ({payload.mime_type}) to {path}")
    return path
