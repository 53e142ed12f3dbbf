# metadata_enrichment/enrichment/__init__.py
"""
Enrichment requests, records and runs.

Modules:
    constants   endpoint, type mapping, record messages
    models      request/response wire models
    records     EnrichmentRequestRecord and the EnrichmentRecords store
    handler     EnrichmentHandler: build, send, reconcile
    metrics     EnrichmentMetrics aggregation
    runner      EnrichmentRunner: the full enrich-and-patch cycle

This package is imported by the config schema and the file patcher, so it
does not import its submodules eagerly. Import from them directly:

    from metadata_enrichment.enrichment.runner import EnrichmentRunner
"""
