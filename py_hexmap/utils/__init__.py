"""Shared helpers for logging setup and random number generation."""
