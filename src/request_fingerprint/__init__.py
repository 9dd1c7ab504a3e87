"""Deterministic HTTP request fingerprinting."""

__version__ = "0.1.0"
