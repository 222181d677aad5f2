"""Presentation layer - process entry surfaces (CLI)."""
