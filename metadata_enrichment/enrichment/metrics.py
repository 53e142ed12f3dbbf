# metadata_enrichment/enrichment/metrics.py
"""
Run outcome aggregation.

Every record with a resolvable type lands in exactly one bucket, so
success.count + fail.count + skipped.count == total.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from metadata_enrichment.enrichment.constants import Messages
from metadata_enrichment.enrichment.records import EnrichmentRequestRecord, EnrichmentStatus


@dataclass
class ComponentEnrichmentStatus:
    type_name: str
    component_name: str
    message: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.type_name,
            "component": self.component_name,
            "message": self.message,
        }


@dataclass
class MetricsBucket:
    count: int = 0
    components: List[ComponentEnrichmentStatus] = field(default_factory=list)

    def add(self, status: ComponentEnrichmentStatus) -> None:
        self.components.append(status)
        self.count += 1


def _record_type_name(record: EnrichmentRequestRecord) -> Optional[str]:
    if record.component_type is not None and record.component_type.name:
        return record.component_type.name
    if record.response is not None:
        result = record.response.first_result
        if result is not None and result.metadata_type:
            return result.metadata_type
    return None


def _record_message(record: EnrichmentRequestRecord) -> str:
    if record.message:
        return record.message
    if record.status == EnrichmentStatus.SUCCESS:
        return ""
    if record.status == EnrichmentStatus.SKIPPED:
        return Messages.DEFAULT_SKIPPED
    return Messages.DEFAULT_FAIL


@dataclass
class EnrichmentMetrics:
    """Success / fail / skipped buckets for one run."""

    success: MetricsBucket = field(default_factory=MetricsBucket)
    fail: MetricsBucket = field(default_factory=MetricsBucket)
    skipped: MetricsBucket = field(default_factory=MetricsBucket)
    total: int = 0

    def add_success_component(self, status: ComponentEnrichmentStatus) -> None:
        self.success.add(status)
        self.total += 1

    def add_fail_component(self, status: ComponentEnrichmentStatus) -> None:
        self.fail.add(status)
        self.total += 1

    def add_skipped_component(self, status: ComponentEnrichmentStatus) -> None:
        self.skipped.add(status)
        self.total += 1

    @property
    def has_failures(self) -> bool:
        return self.fail.count > 0

    @classmethod
    def from_records(
        cls,
        records: Iterable[EnrichmentRequestRecord],
        skipped: Optional[Iterable[ComponentEnrichmentStatus]] = None,
    ) -> "EnrichmentMetrics":
        """
        Aggregate records into buckets.

        Records whose type cannot be determined (no component type and no
        result metadata type) are ignored. Extra skipped statuses are
        appended to the skipped bucket as given.
        """
        metrics = cls()

        for record in records:
            type_name = _record_type_name(record)
            if not type_name:
                continue

            status = ComponentEnrichmentStatus(
                type_name=type_name,
                component_name=record.component_name,
                message=_record_message(record),
            )

            if record.status == EnrichmentStatus.SUCCESS:
                metrics.add_success_component(status)
            elif record.status == EnrichmentStatus.SKIPPED:
                metrics.add_skipped_component(status)
            else:
                metrics.add_fail_component(status)

        for status in skipped or ():
            metrics.add_skipped_component(status)

        return metrics

    def to_dict(self) -> Dict[str, Any]:
        def bucket(b: MetricsBucket) -> Dict[str, Any]:
            return {"count": b.count, "components": [c.to_dict() for c in b.components]}

        return {
            "total": self.total,
            "success": bucket(self.success),
            "fail": bucket(self.fail),
            "skipped": bucket(self.skipped),
        }


__all__ = ["ComponentEnrichmentStatus", "EnrichmentMetrics", "MetricsBucket"]
