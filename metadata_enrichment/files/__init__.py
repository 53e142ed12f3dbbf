# metadata_enrichment/files/__init__.py
"""Reading component files and writing enrichment results back into them."""

from .lwc import LwcProcessor, PatchResult, patch_meta_xml, update_meta_xml
from .markup import build_markup, normalize_markup, parse_markup
from .processor import FileProcessor
from .reader import FileReader, FileReadResult, get_mime_type_from_extension

__all__ = [
    "FileProcessor",
    "FileReadResult",
    "FileReader",
    "LwcProcessor",
    "PatchResult",
    "build_markup",
    "get_mime_type_from_extension",
    "normalize_markup",
    "parse_markup",
    "patch_meta_xml",
    "update_meta_xml",
]
