# metadata_enrichment/files/markup.py
"""
Parse and build configuration markup.

The tree is the plain dict form produced by xmltodict: attributes are
"@"-prefixed keys, text is "#text", repeated elements become lists and
empty elements are None.
"""

from __future__ import annotations

import re
from typing import Any, Dict
from xml.parsers.expat import ExpatError

import xmltodict

from metadata_enrichment.core.exceptions import MarkupError

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
INDENT = "    "

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


def parse_markup(text: str) -> Dict[str, Any]:
    """
    Parse markup text into a tree.

    Raises:
        MarkupError: If the text is not well-formed
    """
    try:
        tree = xmltodict.parse(text)
    except (ExpatError, ValueError) as e:
        raise MarkupError(f"Failed to parse XML: {e}") from e

    if not isinstance(tree, dict):
        raise MarkupError("Failed to parse XML: document has no root element")
    return dict(tree)


def build_markup(tree: Dict[str, Any]) -> str:
    """
    Serialize a tree back to markup text.

    Output starts with the XML declaration, is indented, trimmed, and never
    holds more than one consecutive blank line.

    Raises:
        MarkupError: If the tree cannot be serialized
    """
    if not tree:
        raise MarkupError("Failed to build XML: tree is empty")

    try:
        body = xmltodict.unparse(tree, full_document=False, pretty=True, indent=INDENT)
    except (ValueError, TypeError, AttributeError) as e:
        raise MarkupError(f"Failed to build XML: {e}") from e

    return normalize_markup(f"{XML_DECLARATION}\n{body}")


def normalize_markup(text: str) -> str:
    """Trim and collapse 3+ consecutive newlines into a single blank line."""
    return _EXCESS_BLANK_LINES.sub("\n\n", text.strip())


__all__ = ["XML_DECLARATION", "build_markup", "normalize_markup", "parse_markup"]
