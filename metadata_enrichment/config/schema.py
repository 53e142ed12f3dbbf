# metadata_enrichment/config/schema.py
"""
Configuration schema for metadata enrichment.

Schema hierarchy:
- AppConfig: The merged config consumed by the runner and CLI
- ConnectionConfig: Org instance URL, access token, HTTP timeout
- EnrichmentConfig: Request shaping and dispatch policy
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from metadata_enrichment.enrichment.constants import API_ENDPOINT_ENRICHMENT, DEFAULT_MAX_TOKENS


class ConnectionConfig(BaseModel):
    """
    Org connection settings.

    Example YAML:
        connection:
          instance_url: "https://example.my.salesforce.com"
          access_token: "00D..."   # or SF_ACCESS_TOKEN
          timeout: 120
    """

    instance_url: Optional[str] = Field(
        default=None,
        description="Org instance URL. Can also be set via SF_INSTANCE_URL.",
    )
    access_token: Optional[str] = Field(
        default=None,
        description="Session access token. Can also be set via SF_ACCESS_TOKEN.",
    )
    timeout: float = Field(
        default=120.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("instance_url")
    @classmethod
    def _strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v


class EnrichmentConfig(BaseModel):
    """Request shaping and dispatch policy."""

    max_tokens: int = Field(
        default=DEFAULT_MAX_TOKENS,
        ge=1,
        description="Maximum output size requested per description",
    )
    endpoint: str = Field(
        default=API_ENDPOINT_ENRICHMENT,
        description="Enrichment endpoint path on the org",
    )
    null_body_status: Literal["FAIL", "SKIPPED"] = Field(
        default="FAIL",
        description="Status for records that reach dispatch without a request body",
    )
    max_workers: int = Field(
        default=16,
        ge=1,
        description="Upper bound on concurrent file reads and requests",
    )

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    """Complete configuration after defaults, user file and environment are merged."""

    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)

    model_config = ConfigDict(extra="forbid")


__all__ = ["AppConfig", "ConnectionConfig", "EnrichmentConfig"]
