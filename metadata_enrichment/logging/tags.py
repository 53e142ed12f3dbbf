# metadata_enrichment/logging/tags.py
"""
Subsystem tags prefixed to log messages.

Changing a tag here updates it project-wide.
"""

ENRICH = "[ENRICH]"
FILES = "[FILES]"
PATCH = "[PATCH]"
HTTP = "[HTTP]"
RUNNER = "[RUNNER]"
CLI = "[CLI]"
