# metadata_enrichment/enrichment/records.py
"""
Per-component enrichment records and the store that owns them.

Status transitions:
    NOT_PROCESSED -> SUCCESS | FAIL      network reconciliation
    (creation)    -> SKIPPED             ineligible or content-less component
    SUCCESS       -> SKIPPED             patch phase, opt-out flag set

SKIPPED is terminal for network reconciliation.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Union

from metadata_enrichment.components.base import (
    MetadataType,
    MetadataTypeAndName,
    component_identity,
    component_type_name,
)
from metadata_enrichment.enrichment.constants import LWC_METADATA_TYPE_NAME, Messages
from metadata_enrichment.enrichment.models import (
    EnrichMetadataResult,
    EnrichmentRequestBody,
    default_request_body,
)


class EnrichmentStatus(str, Enum):
    NOT_PROCESSED = "NOT_PROCESSED"
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"
    SKIPPED = "SKIPPED"


@dataclass
class EnrichmentRequestRecord:
    """
    State of one component through a single enrichment run.

    Attributes:
        component_name: Component identity (never changes)
        component_type: Native type, if known
        request_body: Request to send; None means no request could be built
        response: Service response, once received
        message: Human-readable explanation of the current status
        status: Where the record is in its lifecycle
    """

    component_name: str
    component_type: Optional[MetadataType]
    request_body: Optional[EnrichmentRequestBody]
    response: Optional[EnrichMetadataResult] = None
    message: Optional[str] = None
    status: EnrichmentStatus = EnrichmentStatus.NOT_PROCESSED


ComponentRef = Union[MetadataTypeAndName, object]


def _ref_name(component: ComponentRef) -> Optional[str]:
    if isinstance(component, MetadataTypeAndName):
        return component.component_name
    return component_identity(component)


def _ref_type_name(component: ComponentRef) -> Optional[str]:
    if isinstance(component, MetadataTypeAndName):
        return component.type_name
    return component_type_name(component)


class EnrichmentRecords:
    """
    Ordered, name-keyed record collection for one run.

    Records are owned by the store: read them through get()/iteration and
    change them only through the methods below.
    """

    def __init__(self, components: Iterable = ()):
        self._records: Dict[str, EnrichmentRequestRecord] = {}
        self.initialize(components)

    @classmethod
    def from_records(cls, records: Iterable[EnrichmentRequestRecord]) -> "EnrichmentRecords":
        """Build a store holding copies of existing records (first name wins)."""
        store = cls()
        for record in records:
            if record.component_name not in store._records:
                store._records[record.component_name] = dataclasses.replace(record)
        return store

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def get(self, component_name: str) -> Optional[EnrichmentRequestRecord]:
        return self._records.get(component_name)

    def to_list(self) -> List[EnrichmentRequestRecord]:
        return list(self._records.values())

    def __iter__(self) -> Iterator[EnrichmentRequestRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, component_name: object) -> bool:
        return component_name in self._records

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def initialize(self, components: Iterable) -> None:
        """Add a NOT_PROCESSED record for every component with identity and type."""
        for component in components:
            component_name = component_identity(component)
            component_type = getattr(component, "type", None)
            if not component_name or component_type is None:
                continue
            if component_name in self._records:
                continue
            self._records[component_name] = EnrichmentRequestRecord(
                component_name=component_name,
                component_type=component_type,
                request_body=default_request_body(),
            )

    def add_skipped_components(self, components: Iterable[ComponentRef]) -> None:
        """Add SKIPPED records for components not already present."""
        for component in components:
            component_name = _ref_name(component)
            if not component_name or component_name in self._records:
                continue

            type_name = _ref_type_name(component)
            self._records[component_name] = EnrichmentRequestRecord(
                component_name=component_name,
                component_type=MetadataType(name=type_name) if type_name else None,
                request_body=default_request_body(),
                status=EnrichmentStatus.SKIPPED,
            )

    def update_with_status(
        self, components: Iterable[ComponentRef], status: EnrichmentStatus
    ) -> None:
        """Overwrite the status of every matching record, whatever its current state."""
        names = {name for name in (_ref_name(c) for c in components) if name}
        for record in self._records.values():
            if record.component_name in names:
                record.status = status

    def update_with_results(self, results: Iterable[EnrichmentRequestRecord]) -> None:
        """
        Merge network-phase records into the store.

        Request body, response and message are taken from the incoming record.
        A SKIPPED record keeps its status; otherwise an incoming SKIPPED
        (content-less component) is adopted, and anything else becomes
        SUCCESS with a response or FAIL without one.
        """
        results_by_name = {r.component_name: r for r in results}
        for record in self._records.values():
            processed = results_by_name.get(record.component_name)
            if processed is None:
                continue

            record.request_body = processed.request_body
            record.response = processed.response
            if record.status != EnrichmentStatus.SKIPPED:
                if processed.status == EnrichmentStatus.SKIPPED:
                    record.status = EnrichmentStatus.SKIPPED
                elif processed.response is not None:
                    record.status = EnrichmentStatus.SUCCESS
                else:
                    record.status = EnrichmentStatus.FAIL
            record.message = processed.message

    def generate_skip_reasons(
        self,
        components: Iterable[ComponentRef],
        source_components: Iterable,
    ) -> None:
        """Explain SKIPPED records that have no message yet (most specific reason wins)."""
        source_by_name = {}
        for source in source_components:
            name = component_identity(source)
            if name:
                source_by_name[name] = source

        for component in components:
            component_name = _ref_name(component)
            if not component_name:
                continue

            record = self._records.get(component_name)
            if record is None or record.status != EnrichmentStatus.SKIPPED or record.message:
                continue

            source = source_by_name.get(component_name)
            if source is None:
                message = Messages.COMPONENT_NOT_FOUND
            elif component_type_name(source) != LWC_METADATA_TYPE_NAME:
                message = Messages.LWC_ONLY
            elif not getattr(source, "xml", None):
                message = Messages.LWC_CONFIGURATION_NOT_FOUND
            else:
                message = Messages.UNKNOWN_SKIP_REASON

            record.message = message

    def annotate(
        self,
        component_name: str,
        message: str,
        status: Optional[EnrichmentStatus] = None,
    ) -> bool:
        """
        Record a patch-phase outcome on one record (never touches the response).

        Returns:
            True if the record exists
        """
        record = self._records.get(component_name)
        if record is None:
            return False

        record.message = message
        if status is not None:
            record.status = status
        return True


__all__ = ["EnrichmentRecords", "EnrichmentRequestRecord", "EnrichmentStatus"]
