# metadata_enrichment/files/lwc.py
"""
Write enrichment results into LightningComponentBundle configuration files.

For each `<name>.js-meta.xml` with a successful result:
    - skipUplift=true anywhere under LightningComponentBundle/ai -> SKIPPED, no write
    - otherwise LightningComponentBundle/ai is replaced with
      {skipUplift: false, description, score} and the file is rewritten

Markup and write failures are recorded on the component's record only.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from metadata_enrichment.components.base import component_identity
from metadata_enrichment.core.exceptions import MarkupError
from metadata_enrichment.enrichment.constants import LWC_CONFIGURATION_SUFFIX, Messages
from metadata_enrichment.enrichment.models import EnrichmentResult
from metadata_enrichment.enrichment.records import EnrichmentRecords, EnrichmentStatus
from metadata_enrichment.files.markup import build_markup, parse_markup
from metadata_enrichment.files.reader import FileReader, FileReadResult
from metadata_enrichment.logging import get_logger, tags

logger = get_logger(__name__)

BUNDLE_ELEMENT = "LightningComponentBundle"
AI_ELEMENT = "ai"
SKIP_UPLIFT_ELEMENT = "skipUplift"
TEXT_KEY = "#text"


@dataclass
class PatchResult:
    """Outcome of patching one configuration file in memory."""

    content: str
    opted_out: bool = False


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def _is_true(value: Any) -> bool:
    if value is True:
        return True
    if isinstance(value, dict):
        value = value.get(TEXT_KEY)
    return isinstance(value, str) and value.strip().lower() == "true"


def format_score(score: Optional[float]) -> str:
    """Render a score without precision loss (0.95 -> "0.95", 1.0 -> "1")."""
    if score is None:
        return ""
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


def is_opt_out_enabled(tree: Dict[str, Any]) -> bool:
    """True if any skipUplift under LightningComponentBundle/ai is true."""
    for bundle in _as_list(tree.get(BUNDLE_ELEMENT)):
        if not isinstance(bundle, dict):
            continue
        for ai in _as_list(bundle.get(AI_ELEMENT)):
            if not isinstance(ai, dict):
                continue
            if any(_is_true(v) for v in _as_list(ai.get(SKIP_UPLIFT_ELEMENT))):
                return True
    return False


def apply_enrichment(tree: Dict[str, Any], result: EnrichmentResult) -> Dict[str, Any]:
    """
    Set LightningComponentBundle/ai from a result.

    The bundle element is created only for an empty tree; a document with
    any other root is refused so the file keeps a single root element.

    Raises:
        MarkupError: If the document root is not LightningComponentBundle
    """
    if tree and BUNDLE_ELEMENT not in tree:
        roots = ", ".join(sorted(tree))
        raise MarkupError(f"Expected root element {BUNDLE_ELEMENT}, found: {roots}")

    bundle = tree.get(BUNDLE_ELEMENT)
    if bundle is None:
        bundle = {}
    elif not isinstance(bundle, dict):
        bundle = {TEXT_KEY: str(bundle)}

    bundle[AI_ELEMENT] = {
        SKIP_UPLIFT_ELEMENT: "false",
        "description": result.description or "",
        "score": format_score(result.description_score),
    }
    tree[BUNDLE_ELEMENT] = bundle
    return tree


def patch_meta_xml(xml_content: str, result: EnrichmentResult) -> PatchResult:
    """
    Patch configuration markup in memory.

    The opt-out flag is checked before anything else; when set, the
    original content comes back unchanged.

    Raises:
        MarkupError: If the markup cannot be parsed or rebuilt
    """
    tree = parse_markup(xml_content)
    if is_opt_out_enabled(tree):
        return PatchResult(content=xml_content, opted_out=True)

    return PatchResult(content=build_markup(apply_enrichment(tree, result)))


def update_meta_xml(xml_content: str, result: EnrichmentResult) -> str:
    """
    Return configuration markup with the enrichment result embedded.

    Raises:
        MarkupError: If the markup cannot be parsed or rebuilt
    """
    return build_markup(apply_enrichment(parse_markup(xml_content), result))


class LwcProcessor:
    """Patches LightningComponentBundle configuration files."""

    def __init__(self, reader: Optional[FileReader] = None):
        self.reader = reader or FileReader()

    @staticmethod
    def is_meta_xml_file(file_path: str) -> bool:
        return Path(file_path).name.endswith(LWC_CONFIGURATION_SUFFIX)

    def read_component_files(self, components: Sequence[Any]) -> List[FileReadResult]:
        """Read the configuration file of every named component that has one."""
        targets = [
            (component_identity(c), c.xml)
            for c in components
            if component_identity(c) and getattr(c, "xml", None)
        ]
        if not targets:
            return []

        workers = max(1, min(self.reader.max_workers, len(targets)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lwc_read") as executor:
            results = list(
                executor.map(lambda t: self.reader.read_component_file(t[0], t[1]), targets)
            )
        return [r for r in results if r is not None]

    def update_metadata_files(
        self,
        components: Sequence[Any],
        records: EnrichmentRecords,
    ) -> EnrichmentRecords:
        """
        Write results into configuration files, one file at a time.

        Returns:
            The same record store, annotated with patch outcomes
        """
        files = self.read_component_files(components)
        written = 0

        for file in files:
            if not self.is_meta_xml_file(file.file_path):
                continue

            record = records.get(file.component_name)
            if record is None or record.response is None:
                continue

            result = record.response.first_result
            if result is None:
                continue

            try:
                patch = patch_meta_xml(file.file_contents, result)
            except MarkupError as e:
                logger.warning(f"{tags.PATCH} {file.file_path}: {e}")
                records.annotate(file.component_name, str(e))
                continue

            if patch.opted_out:
                logger.info(f"{tags.PATCH} Opt-out set for {file.component_name}, not writing")
                records.annotate(
                    file.component_name, Messages.OPT_OUT_ENABLED, EnrichmentStatus.SKIPPED
                )
                continue

            try:
                Path(file.file_path).write_text(patch.content, encoding="utf-8")
            except OSError as e:
                logger.warning(f"{tags.PATCH} Could not write {file.file_path}: {e}")
                records.annotate(file.component_name, f"Failed to write {file.file_path}: {e}")
                continue

            written += 1
            logger.debug(f"{tags.PATCH} Updated {file.file_path}")

        logger.info(f"{tags.PATCH} Updated {written} configuration files")
        return records


__all__ = [
    "LwcProcessor",
    "PatchResult",
    "apply_enrichment",
    "format_score",
    "is_opt_out_enabled",
    "patch_meta_xml",
    "update_meta_xml",
]
