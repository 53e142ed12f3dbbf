# metadata_enrichment/components/resolver.py
"""
Discover project components on disk and select the requested ones.

Usage:
    components = ComponentResolver(Path("./force-app")).discover()
    selected, missing = select_components(
        components, [parse_metadata_option("LightningComponentBundle:hello")]
    )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

from metadata_enrichment.components.base import (
    MetadataType,
    MetadataTypeAndName,
    SourceComponent,
    component_identity,
    component_type_name,
)
from metadata_enrichment.components.registry import (
    BUNDLE_TYPES,
    LIGHTNING_COMPONENT_BUNDLE,
    get_type,
    get_type_for_directory,
)
from metadata_enrichment.enrichment.constants import LWC_CONFIGURATION_SUFFIX
from metadata_enrichment.logging import get_logger

logger = get_logger(__name__)

IGNORED_DIRECTORIES = {".git", ".sfdx", ".sf", "node_modules", "__pycache__"}
META_XML_SUFFIX = "-meta.xml"


def parse_metadata_option(value: str) -> MetadataTypeAndName:
    """
    Parse "Type:Name" or "Type" into a MetadataTypeAndName.

    Known type names are normalized to their registered spelling.

    Raises:
        ValueError: If the value is empty or has an empty type
    """
    raw = value.strip()
    if not raw:
        raise ValueError("Metadata option cannot be empty")

    type_part, _, name_part = raw.partition(":")
    type_part = type_part.strip()
    if not type_part:
        raise ValueError(f"Metadata option '{value}' is missing a type")

    known = get_type(type_part)
    type_name = known.name if known else type_part
    name = name_part.strip() or None
    if name == "*":
        name = None
    return MetadataTypeAndName(type_name=type_name, component_name=name)


def _matches(component: Any, request: MetadataTypeAndName) -> bool:
    if component_type_name(component) != request.type_name:
        return False
    return request.component_name is None or component_identity(component) == request.component_name


def select_components(
    components: Sequence[Any],
    requested: Optional[Sequence[MetadataTypeAndName]] = None,
) -> tuple[List[Any], List[MetadataTypeAndName]]:
    """
    Pick the requested components.

    With no request every component is returned. A request without a name
    selects every component of that type. Each component appears once, in
    request order.

    Returns:
        (selected components, named requests that matched nothing)
    """
    if requested is None:
        return list(components), []

    selected: List[Any] = []
    missing: List[MetadataTypeAndName] = []
    for request in requested:
        matches = [c for c in components if _matches(c, request)]
        if not matches:
            if request.component_name:
                missing.append(request)
            continue
        for component in matches:
            if not any(component is s for s in selected):
                selected.append(component)
    return selected, missing


class ComponentResolver:
    """Discover components of the registered types under a project directory."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)

    def discover(self) -> List[SourceComponent]:
        """Walk the project and build one SourceComponent per component found."""
        components: List[SourceComponent] = []

        for directory in sorted(self._type_directories()):
            metadata_type = get_type_for_directory(directory.name)
            if metadata_type is None:
                continue
            if metadata_type in BUNDLE_TYPES:
                components.extend(self._bundles(directory, metadata_type))
            else:
                components.extend(self._files(directory, metadata_type))

        logger.debug(f"Discovered {len(components)} components under {self.project_dir}")
        return components

    # -------------------------------------------------------------------------
    # Discovery helpers
    # -------------------------------------------------------------------------

    def _type_directories(self) -> Iterable[Path]:
        if not self.project_dir.is_dir():
            return []
        return [
            path
            for path in self.project_dir.rglob("*")
            if path.is_dir()
            and get_type_for_directory(path.name) is not None
            and not IGNORED_DIRECTORIES.intersection(path.relative_to(self.project_dir).parts)
        ]

    def _bundles(self, directory: Path, metadata_type: MetadataType) -> List[SourceComponent]:
        bundles = []
        for bundle_dir in sorted(p for p in directory.iterdir() if p.is_dir()):
            if bundle_dir.name.startswith((".", "__")):
                continue
            bundles.append(
                SourceComponent(
                    name=bundle_dir.name,
                    type=metadata_type,
                    xml=self._bundle_xml(bundle_dir, metadata_type),
                    content=str(bundle_dir),
                )
            )
        return bundles

    def _bundle_xml(self, bundle_dir: Path, metadata_type: MetadataType) -> Optional[str]:
        if metadata_type == LIGHTNING_COMPONENT_BUNDLE:
            xml = bundle_dir / f"{bundle_dir.name}{LWC_CONFIGURATION_SUFFIX}"
            return str(xml) if xml.is_file() else None

        candidates = sorted(bundle_dir.glob(f"*{META_XML_SUFFIX}"))
        return str(candidates[0]) if candidates else None

    def _files(self, directory: Path, metadata_type: MetadataType) -> List[SourceComponent]:
        suffix = metadata_type.suffix or ""
        components = []
        for path in sorted(directory.iterdir()):
            if not path.is_file() or not path.name.endswith(suffix):
                continue
            name = path.name[: -len(suffix)] if suffix else path.stem

            if suffix.endswith(META_XML_SUFFIX):
                # the metadata file is the component itself
                components.append(SourceComponent(name=name, type=metadata_type, xml=str(path)))
                continue

            sidecar = path.with_name(path.name + META_XML_SUFFIX)
            components.append(
                SourceComponent(
                    name=name,
                    type=metadata_type,
                    xml=str(sidecar) if sidecar.is_file() else None,
                    content=str(path),
                )
            )
        return components


__all__ = ["ComponentResolver", "parse_metadata_option", "select_components"]
