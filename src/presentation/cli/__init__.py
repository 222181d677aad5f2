"""Command-line interface for the enrichment worker."""
