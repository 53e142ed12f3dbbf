# metadata_enrichment/enrichment/runner.py
"""
End-to-end enrichment run over a project's components.

Phases (sequential):
    1. select requested components
    2. work out which of them cannot be enriched
    3. seed the record store
    4. enrich eligible components and merge the outcomes
    5. explain skipped records
    6. write results into configuration files
    7. aggregate metrics
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from metadata_enrichment.components.base import (
    MetadataTypeAndName,
    component_type_name,
)
from metadata_enrichment.components.resolver import select_components
from metadata_enrichment.config.schema import AppConfig, EnrichmentConfig
from metadata_enrichment.connection.client import Connection
from metadata_enrichment.enrichment.constants import LWC_METADATA_TYPE_NAME
from metadata_enrichment.enrichment.handler import EnrichmentHandler
from metadata_enrichment.enrichment.metrics import EnrichmentMetrics
from metadata_enrichment.enrichment.records import EnrichmentRecords, EnrichmentStatus
from metadata_enrichment.files.processor import FileProcessor
from metadata_enrichment.files.reader import FileReader
from metadata_enrichment.logging import get_logger, tags

logger = get_logger(__name__)


@dataclass
class EnrichmentRunResult:
    records: EnrichmentRecords
    metrics: EnrichmentMetrics


class EnrichmentRunner:
    """
    Runs the full enrich-and-patch cycle.

    Usage:
        runner = EnrichmentRunner(connection, load_config(project_dir=root))
        result = runner.run(ComponentResolver(root).discover())
        print(result.metrics.to_dict())
    """

    def __init__(
        self,
        connection: Connection,
        config: Union[AppConfig, EnrichmentConfig, None] = None,
        reader: Optional[FileReader] = None,
    ):
        if isinstance(config, AppConfig):
            config = config.enrichment
        self.config = config or EnrichmentConfig()
        self.reader = reader or FileReader(max_workers=self.config.max_workers)
        self.handler = EnrichmentHandler.from_config(connection, self.config, reader=self.reader)
        self.file_processor = FileProcessor(reader=self.reader)

    def run(
        self,
        project_components: Sequence[Any],
        requested: Optional[Sequence[MetadataTypeAndName]] = None,
    ) -> EnrichmentRunResult:
        selected, missing = select_components(project_components, requested)

        eligible = []
        skip: List[Any] = list(missing)
        for component in selected:
            if component_type_name(component) != LWC_METADATA_TYPE_NAME:
                skip.append(component)
            elif not getattr(component, "xml", None):
                skip.append(component)
            else:
                eligible.append(component)

        logger.info(
            f"{tags.RUNNER} {len(selected)} selected, {len(eligible)} eligible, "
            f"{len(skip)} skipped"
        )

        records = EnrichmentRecords(selected)
        records.add_skipped_components(skip)
        records.update_with_status(skip, EnrichmentStatus.SKIPPED)

        if eligible:
            records.update_with_results(self.handler.enrich(eligible))

        records.generate_skip_reasons(skip, project_components)
        self.file_processor.update_metadata_files(eligible, records)

        metrics = EnrichmentMetrics.from_records(records)
        logger.info(
            f"{tags.RUNNER} Done: {metrics.success.count} succeeded, "
            f"{metrics.fail.count} failed, {metrics.skipped.count} skipped"
        )
        return EnrichmentRunResult(records=records, metrics=metrics)


__all__ = ["EnrichmentRunResult", "EnrichmentRunner"]
