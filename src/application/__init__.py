"""Application layer - Use cases and orchestration.

Structure:
- commands/: Command dataclasses and handlers (batch run, per-item enrichment)
- services/: Resolution chains and the run guard

The application layer orchestrates domain ports and contains no I/O of its own.
"""
