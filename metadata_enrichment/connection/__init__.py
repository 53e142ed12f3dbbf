# metadata_enrichment/connection/__init__.py
"""Org connection: the transport enrichment requests go through."""

from metadata_enrichment.connection.client import Connection, OrgConnection

__all__ = ["Connection", "OrgConnection"]
