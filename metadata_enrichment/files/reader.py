# metadata_enrichment/files/reader.py
"""
Read component content files.

A missing or unreadable file never raises: it simply contributes nothing.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from metadata_enrichment.components.base import component_identity
from metadata_enrichment.enrichment.constants import DEFAULT_MIME_TYPE, LWC_MIME_TYPES
from metadata_enrichment.logging import get_logger, tags

logger = get_logger(__name__)

DEFAULT_MAX_WORKERS = 16


@dataclass
class FileReadResult:
    """Contents of one component file."""

    component_name: str
    file_path: str
    file_contents: str
    mime_type: str


def get_mime_type_from_extension(file_path: str) -> str:
    """Classify a path by its extension (case-insensitive)."""
    ext = Path(file_path).suffix.lower()
    return LWC_MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


class FileReader:
    """Reads component files as UTF-8 text, concurrently per component."""

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS):
        self.max_workers = max_workers

    def read_component_file(self, component_name: str, file_path: str) -> Optional[FileReadResult]:
        """
        Read one file.

        Returns:
            FileReadResult, or None if the file cannot be read for any reason
        """
        try:
            with open(file_path, encoding="utf-8", newline="") as f:
                file_contents = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"{tags.FILES} Could not read {file_path}: {e}")
            return None

        return FileReadResult(
            component_name=component_name,
            file_path=file_path,
            file_contents=file_contents,
            mime_type=get_mime_type_from_extension(file_path),
        )

    def read_files(self, component_name: str, file_paths: List[str]) -> List[FileReadResult]:
        """Read several files of one component; unreadable files are dropped, order kept."""
        if not file_paths:
            return []

        workers = max(1, min(self.max_workers, len(file_paths)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="file_read") as executor:
            results = list(
                executor.map(lambda path: self.read_component_file(component_name, path), file_paths)
            )

        return [result for result in results if result is not None]

    def read_component_files(self, component) -> List[FileReadResult]:
        """Read every content file of a component (empty if it has no identity)."""
        component_name = component_identity(component)
        if not component_name:
            return []

        file_paths = list(component.walk_content())
        return self.read_files(component_name, file_paths)


__all__ = ["FileReadResult", "FileReader", "get_mime_type_from_extension"]
