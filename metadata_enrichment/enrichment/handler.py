# metadata_enrichment/enrichment/handler.py
"""
Enrichment orchestration.

EnrichmentHandler turns source components into enrichment request records,
sends one request per eligible component and reconciles the outcomes.

Flow:
    components
        ├── LightningComponentBundle ──> read files ──> request body ──> POST ──> SUCCESS | FAIL
        │                                    └── no files ──> SKIPPED
        └── any other type ──────────────────────────────────────────────────> SKIPPED

Output order is always [eligible records...] + [ineligible records...],
each in input order.

Usage:
    handler = EnrichmentHandler(connection, reader=FileReader())
    records = handler.enrich(components)
"""

from __future__ import annotations

import dataclasses
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from metadata_enrichment.components.base import component_identity, component_type_name
from metadata_enrichment.config.schema import EnrichmentConfig
from metadata_enrichment.connection.client import Connection
from metadata_enrichment.enrichment.constants import (
    API_ENDPOINT_ENRICHMENT,
    CONTENT_ENCODING,
    DEFAULT_MAX_TOKENS,
    ENRICHMENT_REQUEST_ENTITY_ENCODING_HEADER,
    LWC_METADATA_TYPE_NAME,
    Messages,
    metadata_type_for,
)
from metadata_enrichment.enrichment.models import (
    ContentBundle,
    ContentBundleFile,
    EnrichMetadataResult,
    EnrichmentRequestBody,
)
from metadata_enrichment.enrichment.records import EnrichmentRequestRecord, EnrichmentStatus
from metadata_enrichment.files.reader import FileReader, FileReadResult
from metadata_enrichment.logging import get_logger, tags

logger = get_logger(__name__)

DEFAULT_MAX_WORKERS = 16

T = TypeVar("T")
R = TypeVar("R")


def _run_concurrently(fn: Callable[[T], R], items: Sequence[T], max_workers: int, prefix: str) -> List[R]:
    """Apply fn to every item on a thread pool, returning results in input order."""
    if not items:
        return []
    workers = max(1, min(max_workers, len(items)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix=prefix) as executor:
        return list(executor.map(fn, items))


def _error_message(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


class EnrichmentHandler:
    """
    Builds, sends and reconciles enrichment requests.

    Dependencies are explicit so tests can pass fakes:
        connection: anything with request_post(path, body, headers=...)
        reader: FileReader used to collect component files
    """

    def __init__(
        self,
        connection: Connection,
        *,
        reader: Optional[FileReader] = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        endpoint: str = API_ENDPOINT_ENRICHMENT,
        null_body_status: EnrichmentStatus = EnrichmentStatus.FAIL,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self.connection = connection
        self.reader = reader or FileReader(max_workers=max_workers)
        self.max_tokens = max_tokens
        self.endpoint = endpoint
        self.null_body_status = EnrichmentStatus(null_body_status)
        self.max_workers = max_workers

    @classmethod
    def from_config(
        cls,
        connection: Connection,
        config: EnrichmentConfig,
        reader: Optional[FileReader] = None,
    ) -> "EnrichmentHandler":
        return cls(
            connection,
            reader=reader or FileReader(max_workers=config.max_workers),
            max_tokens=config.max_tokens,
            endpoint=config.endpoint,
            null_body_status=EnrichmentStatus(config.null_body_status),
            max_workers=config.max_workers,
        )

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def enrich(self, components: Sequence[Any]) -> List[EnrichmentRequestRecord]:
        """
        Process and send enrichment requests for the given components.

        Only LightningComponentBundle components are sent; everything else is
        returned as SKIPPED without reading files or calling the service.
        Components without a name are dropped.

        Returns:
            Records for eligible components followed by ineligible ones
        """
        lwc_components = []
        non_lwc_components = []
        for component in components:
            if component_type_name(component) == LWC_METADATA_TYPE_NAME:
                lwc_components.append(component)
            else:
                non_lwc_components.append(component)

        lwc_records = self.create_enrichment_request_records(lwc_components)
        non_lwc_records = self.create_skipped_records(non_lwc_components, Messages.LWC_ONLY)

        enrichment_results = self.send_enrichment_requests(lwc_records)

        logger.info(
            f"{tags.ENRICH} Processed {len(enrichment_results)} eligible and "
            f"{len(non_lwc_records)} ineligible components"
        )
        return enrichment_results + non_lwc_records

    # -------------------------------------------------------------------------
    # Record construction
    # -------------------------------------------------------------------------

    def create_enrichment_request_records(
        self, components: Sequence[Any]
    ) -> List[EnrichmentRequestRecord]:
        """Build one record per named component, reading files concurrently."""
        named = [c for c in components if component_identity(c)]
        return _run_concurrently(
            self.create_enrichment_request_record, named, self.max_workers, "enrich_build"
        )

    def create_enrichment_request_record(self, component: Any) -> EnrichmentRequestRecord:
        component_name = component_identity(component)
        component_type = getattr(component, "type", None)

        files = self.reader.read_component_files(component)
        if not files:
            logger.debug(f"{tags.ENRICH} No readable files for {component_name}")
            return EnrichmentRequestRecord(
                component_name=component_name,
                component_type=component_type,
                request_body=None,
                message=Messages.FILE_READ_FAILED.format(name=component_name),
                status=EnrichmentStatus.SKIPPED,
            )

        content_bundle = self.create_content_bundle(component_name, files)
        request_body = self.create_enrichment_request_body(
            content_bundle, component_type_name(component)
        )

        return EnrichmentRequestRecord(
            component_name=component_name,
            component_type=component_type,
            request_body=request_body,
        )

    def create_skipped_records(
        self, components: Sequence[Any], message: str
    ) -> List[EnrichmentRequestRecord]:
        """SKIPPED records for ineligible components; their files are never read."""
        records = []
        for component in components:
            component_name = component_identity(component)
            if not component_name:
                continue
            records.append(
                EnrichmentRequestRecord(
                    component_name=component_name,
                    component_type=getattr(component, "type", None),
                    request_body=None,
                    message=message,
                    status=EnrichmentStatus.SKIPPED,
                )
            )
        return records

    @staticmethod
    def create_content_bundle_file(file: FileReadResult) -> ContentBundleFile:
        return ContentBundleFile(
            filename=Path(file.file_path).name,
            mime_type=file.mime_type,
            content=file.file_contents,
            encoding=CONTENT_ENCODING,
        )

    @classmethod
    def create_content_bundle(cls, component_name: str, files: Sequence[FileReadResult]) -> ContentBundle:
        """One bundle per component; a later file with the same basename replaces an earlier one."""
        bundle_files = {}
        for file in files:
            bundle_file = cls.create_content_bundle_file(file)
            bundle_files[bundle_file.filename] = bundle_file

        return ContentBundle(resource_name=component_name, files=bundle_files)

    def create_enrichment_request_body(
        self, content_bundle: ContentBundle, type_name: Optional[str] = None
    ) -> EnrichmentRequestBody:
        return EnrichmentRequestBody(
            content_bundles=[content_bundle],
            metadata_type=metadata_type_for(type_name),
            max_tokens=self.max_tokens,
        )

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def send_enrichment_request(self, record: EnrichmentRequestRecord) -> EnrichmentRequestRecord:
        """
        POST one record's body and return a copy holding the response.

        Raises:
            Whatever the connection or response validation raises
        """
        raw = self.connection.request_post(
            self.endpoint,
            record.request_body.to_wire(),
            headers={ENRICHMENT_REQUEST_ENTITY_ENCODING_HEADER: "false"},
        )
        response = EnrichMetadataResult.model_validate(raw)
        return dataclasses.replace(record, response=response, status=EnrichmentStatus.SUCCESS)

    def send_enrichment_requests(
        self, records: Sequence[EnrichmentRequestRecord]
    ) -> List[EnrichmentRequestRecord]:
        """
        Send every sendable record concurrently, isolating each failure.

        SKIPPED records pass through untouched. A record without a request
        body is not sent and takes the configured null-body status. A failed
        request becomes FAIL with the error text; nothing is retried.
        """
        to_send = [
            index
            for index, r in enumerate(records)
            if r.status != EnrichmentStatus.SKIPPED and r.request_body is not None
        ]

        with ThreadPoolExecutor(
            max_workers=max(1, min(self.max_workers, len(to_send) or 1)),
            thread_name_prefix="enrich_send",
        ) as executor:
            futures = {
                index: executor.submit(self.send_enrichment_request, records[index])
                for index in to_send
            }

            results = []
            for index, record in enumerate(records):
                if record.status == EnrichmentStatus.SKIPPED:
                    results.append(record)
                    continue

                if record.request_body is None:
                    results.append(
                        dataclasses.replace(
                            record,
                            response=None,
                            message=Messages.NULL_REQUEST_BODY.format(name=record.component_name),
                            status=self.null_body_status,
                        )
                    )
                    continue

                try:
                    results.append(futures[index].result())
                except Exception as e:
                    logger.warning(
                        f"{tags.ENRICH} Enrichment request failed for {record.component_name}: {e}"
                    )
                    results.append(
                        dataclasses.replace(
                            record,
                            response=None,
                            message=_error_message(e),
                            status=EnrichmentStatus.FAIL,
                        )
                    )

        return results


def enrich(connection: Connection, components: Sequence[Any], **options: Any) -> List[EnrichmentRequestRecord]:
    """Shortcut for EnrichmentHandler(connection, **options).enrich(components)."""
    return EnrichmentHandler(connection, **options).enrich(components)


__all__ = ["EnrichmentHandler", "enrich"]
