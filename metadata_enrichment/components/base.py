# metadata_enrichment/components/base.py
"""
Component model consumed by enrichment.

A SourceComponent is a named unit of project metadata with a native type,
an optional configuration file (`xml`) and content files reachable through
walk_content(). Enrichment only relies on `identity`, `type.name`, `xml`
and walk_content(), so tests and other front ends can supply their own
objects with the same shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional


@dataclass(frozen=True)
class MetadataType:
    """
    Native metadata type descriptor.

    Attributes:
        name: Type name (e.g., "LightningComponentBundle")
        directory_name: Project folder holding components of this type
        suffix: File suffix identifying a component file, if any
    """

    name: str
    directory_name: str = ""
    suffix: Optional[str] = None


@dataclass(frozen=True)
class MetadataTypeAndName:
    """A (type, name) pair as requested on the command line or reported back."""

    type_name: str
    component_name: Optional[str] = None

    def __str__(self) -> str:
        if self.component_name:
            return f"{self.type_name}:{self.component_name}"
        return self.type_name


@dataclass
class SourceComponent:
    """
    A project component on disk.

    Attributes:
        name: Component name
        type: Native metadata type (None if unresolved)
        full_name: Fully qualified name, preferred over `name` when set
        xml: Path to the component's configuration file
        content: Path to the content directory (bundles) or content file
    """

    name: Optional[str]
    type: Optional[MetadataType] = None
    full_name: Optional[str] = None
    xml: Optional[str] = None
    content: Optional[str] = None

    @property
    def identity(self) -> Optional[str]:
        return self.full_name or self.name

    def walk_content(self) -> Iterator[str]:
        """Yield every content file path, sorted, excluding the configuration file."""
        if not self.content:
            return

        root = Path(self.content)
        if root.is_file():
            if str(root) != self.xml:
                yield str(root)
            return

        if not root.is_dir():
            return

        for path in sorted(root.rglob("*")):
            if path.is_file() and str(path) != self.xml:
                yield str(path)


def component_identity(component) -> Optional[str]:
    """Identity of any component-like object (full_name, then name)."""
    return getattr(component, "full_name", None) or getattr(component, "name", None)


def component_type_name(component) -> Optional[str]:
    component_type = getattr(component, "type", None)
    return getattr(component_type, "name", None)


__all__ = [
    "MetadataType",
    "MetadataTypeAndName",
    "SourceComponent",
    "component_identity",
    "component_type_name",
]
