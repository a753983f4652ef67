"""Command line interface for lql."""
