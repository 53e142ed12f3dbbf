# metadata_enrichment/files/processor.py
"""Route enrichment results to the patcher for each component type."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from metadata_enrichment.components.base import component_type_name
from metadata_enrichment.enrichment.constants import LWC_METADATA_TYPE_NAME
from metadata_enrichment.enrichment.records import EnrichmentRecords
from metadata_enrichment.files.lwc import LwcProcessor
from metadata_enrichment.files.reader import FileReader
from metadata_enrichment.logging import get_logger, tags

logger = get_logger(__name__)


class FileProcessor:
    """
    Writes enrichment results back into project files.

    Only LightningComponentBundle has a patcher; components of any other
    type are left alone.
    """

    def __init__(self, reader: Optional[FileReader] = None):
        self.lwc_processor = LwcProcessor(reader=reader)

    @staticmethod
    def group_by_type(components: Sequence[Any]) -> Dict[str, List[Any]]:
        grouped: Dict[str, List[Any]] = {}
        for component in components:
            type_name = component_type_name(component)
            if type_name:
                grouped.setdefault(type_name, []).append(component)
        return grouped

    def update_metadata_files(
        self, components: Sequence[Any], records: EnrichmentRecords
    ) -> EnrichmentRecords:
        grouped = self.group_by_type(components)

        lwc_components = grouped.pop(LWC_METADATA_TYPE_NAME, [])
        if grouped:
            logger.debug(f"{tags.PATCH} No patcher for types: {', '.join(sorted(grouped))}")
        if not lwc_components:
            return records

        return self.lwc_processor.update_metadata_files(lwc_components, records)


__all__ = ["FileProcessor"]
