# metadata_enrichment/components/registry.py
"""
Known metadata types and how they are laid out in a project.

Bundle types live in a folder per component; file types are a single file
plus an optional `-meta.xml` sidecar.
"""

from __future__ import annotations

from typing import Dict, Optional

from metadata_enrichment.components.base import MetadataType

LIGHTNING_COMPONENT_BUNDLE = MetadataType(name="LightningComponentBundle", directory_name="lwc")
AURA_DEFINITION_BUNDLE = MetadataType(name="AuraDefinitionBundle", directory_name="aura")
APEX_CLASS = MetadataType(name="ApexClass", directory_name="classes", suffix=".cls")
FLEXIPAGE = MetadataType(name="Flexipage", directory_name="flexipages", suffix=".flexipage-meta.xml")

BUNDLE_TYPES = (LIGHTNING_COMPONENT_BUNDLE, AURA_DEFINITION_BUNDLE)
FILE_TYPES = (APEX_CLASS, FLEXIPAGE)

_TYPES_BY_NAME: Dict[str, MetadataType] = {t.name: t for t in BUNDLE_TYPES + FILE_TYPES}
_TYPES_BY_DIRECTORY: Dict[str, MetadataType] = {
    t.directory_name: t for t in BUNDLE_TYPES + FILE_TYPES
}


def get_type(name: str) -> Optional[MetadataType]:
    """Look up a registered type by name (case-insensitive)."""
    if name in _TYPES_BY_NAME:
        return _TYPES_BY_NAME[name]
    lowered = name.lower()
    for type_name, metadata_type in _TYPES_BY_NAME.items():
        if type_name.lower() == lowered:
            return metadata_type
    return None


def get_type_for_directory(directory_name: str) -> Optional[MetadataType]:
    return _TYPES_BY_DIRECTORY.get(directory_name)


def list_types() -> list[MetadataType]:
    return list(_TYPES_BY_NAME.values())


__all__ = [
    "APEX_CLASS",
    "AURA_DEFINITION_BUNDLE",
    "BUNDLE_TYPES",
    "FILE_TYPES",
    "FLEXIPAGE",
    "LIGHTNING_COMPONENT_BUNDLE",
    "get_type",
    "get_type_for_directory",
    "list_types",
]
