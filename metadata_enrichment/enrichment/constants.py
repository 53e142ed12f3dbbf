# metadata_enrichment/enrichment/constants.py
"""Endpoint, type mapping and message constants for enrichment."""

API_ENDPOINT_ENRICHMENT = "/services/data/v66.0/metadata-intelligence/enrichments/on-demand"

ENRICHMENT_REQUEST_ENTITY_ENCODING_HEADER = "X-Chatter-Entity-Encoding"

DEFAULT_MAX_TOKENS = 50
CONTENT_ENCODING = "PlainText"

METADATA_TYPE_GENERIC = "Generic"
METADATA_TYPE_LWC = "Lwc"
METADATA_TYPE_APEX_CLASS = "ApexClass"
METADATA_TYPE_FLEXIPAGE = "Flexipage"

MAP_SOURCE_COMPONENT_TYPE_TO_METADATA_TYPE: dict[str, str] = {
    "ApexClass": METADATA_TYPE_APEX_CLASS,
    "Flexipage": METADATA_TYPE_FLEXIPAGE,
    "LightningComponentBundle": METADATA_TYPE_LWC,
    "Generic": METADATA_TYPE_GENERIC,
}

LWC_METADATA_TYPE_NAME = "LightningComponentBundle"
LWC_CONFIGURATION_SUFFIX = ".js-meta.xml"

LWC_MIME_TYPES: dict[str, str] = {
    ".js": "application/javascript",
    ".html": "text/html",
    ".css": "text/css",
    ".xml": "application/xml",
    ".svg": "image/svg+xml",
}
DEFAULT_MIME_TYPE = "application/octet-stream"


def metadata_type_for(type_name: str | None) -> str:
    """Map a native component type name to the service's metadata type tag."""
    if not type_name:
        return METADATA_TYPE_GENERIC
    return MAP_SOURCE_COMPONENT_TYPE_TO_METADATA_TYPE.get(type_name, METADATA_TYPE_GENERIC)


class Messages:
    """User-facing messages recorded on enrichment records."""

    LWC_ONLY = "Only LightningComponentBundle components are eligible for enrichment."
    FILE_READ_FAILED = "No readable content files were found for component {name}."
    NULL_REQUEST_BODY = "No request body could be built for component {name}; request not sent."
    COMPONENT_NOT_FOUND = "Component was not found in the project."
    LWC_CONFIGURATION_NOT_FOUND = (
        "LightningComponentBundle configuration file (.js-meta.xml) was not found."
    )
    UNKNOWN_SKIP_REASON = "Component was skipped for an unknown reason."
    OPT_OUT_ENABLED = "NO-OP: opt-out enabled (skipUplift is set to true)."
    DEFAULT_FAIL = "Enrichment request failed"
    DEFAULT_SKIPPED = "Component skipped"
