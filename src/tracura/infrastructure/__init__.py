"""Tracura - Infrastructure adapters and factory."""
