# metadata_enrichment/__init__.py
"""
metadata-enrichment: AI-generated descriptions for project metadata components.

Reads LightningComponentBundle sources, asks the org's enrichment endpoint
for a description of each, and writes the result into the component's
`.js-meta.xml` configuration file.
"""

__version__ = "0.1.0"
