# metadata_enrichment/enrichment/models.py
"""Pydantic models for enrichment requests and responses (camelCase on the wire)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from metadata_enrichment.enrichment.constants import (
    CONTENT_ENCODING,
    DEFAULT_MAX_TOKENS,
    METADATA_TYPE_GENERIC,
)


class WireModel(BaseModel):
    """Base for models exchanged with the enrichment endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict using the endpoint's field names."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# Request
# =============================================================================


class ContentBundleFile(WireModel):
    """One file of a content bundle."""

    filename: str = Field(..., description="Base filename, unique per bundle")
    mime_type: str = Field(..., alias="mimeType")
    content: str = Field(..., description="Raw file text")
    encoding: str = Field(CONTENT_ENCODING, description="Always PlainText")


class ContentBundle(WireModel):
    """All files of one component, keyed by filename."""

    resource_name: str = Field(..., alias="resourceName")
    files: Dict[str, ContentBundleFile] = Field(default_factory=dict)


class EnrichmentRequestBody(WireModel):
    """Body POSTed to the enrichment endpoint."""

    content_bundles: List[ContentBundle] = Field(default_factory=list, alias="contentBundles")
    metadata_type: str = Field(METADATA_TYPE_GENERIC, alias="metadataType")
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, alias="maxTokens", ge=1)


# =============================================================================
# Response
# =============================================================================


class EnrichmentMetadata(WireModel):
    """Per-request envelope returned by the service."""

    duration_ms: Optional[float] = Field(None, alias="durationMs")
    failure_count: Optional[int] = Field(None, alias="failureCount")
    success_count: Optional[int] = Field(None, alias="successCount")
    timestamp: Optional[str] = None


class EnrichmentResult(WireModel):
    """Generated description for one resource."""

    resource_id: Optional[str] = Field(None, alias="resourceId")
    resource_name: Optional[str] = Field(None, alias="resourceName")
    metadata_type: Optional[str] = Field(None, alias="metadataType")
    model_used: Optional[str] = Field(None, alias="modelUsed")
    description: Optional[str] = None
    description_score: Optional[float] = Field(None, alias="descriptionScore")


class EnrichMetadataResult(WireModel):
    """Full response of one enrichment request."""

    metadata: Optional[EnrichmentMetadata] = None
    results: List[EnrichmentResult] = Field(default_factory=list)

    @property
    def first_result(self) -> Optional[EnrichmentResult]:
        """The only result this client consumes."""
        return self.results[0] if self.results else None


def default_request_body(max_tokens: int = DEFAULT_MAX_TOKENS) -> EnrichmentRequestBody:
    """A fresh placeholder body for records that have not been built yet."""
    return EnrichmentRequestBody(
        content_bundles=[],
        metadata_type=METADATA_TYPE_GENERIC,
        max_tokens=max_tokens,
    )


__all__ = [
    "ContentBundle",
    "ContentBundleFile",
    "EnrichMetadataResult",
    "EnrichmentMetadata",
    "EnrichmentRequestBody",
    "EnrichmentResult",
    "WireModel",
    "default_request_body",
]
