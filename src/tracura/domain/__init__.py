"""Tracura - Domain layer: budget tree, validation and collaborator protocols."""
