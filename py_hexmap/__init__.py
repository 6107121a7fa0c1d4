"""Procedural hexagonal terrain generation."""

__version__ = "0.1.0"
