# metadata_enrichment/components/__init__.py
"""Component model: types, source components, and project resolution."""

from metadata_enrichment.components.base import (
    MetadataType,
    MetadataTypeAndName,
    SourceComponent,
    component_identity,
    component_type_name,
)
from metadata_enrichment.components.resolver import (
    ComponentResolver,
    parse_metadata_option,
    select_components,
)

__all__ = [
    "ComponentResolver",
    "MetadataType",
    "MetadataTypeAndName",
    "SourceComponent",
    "component_identity",
    "component_type_name",
    "parse_metadata_option",
    "select_components",
]
