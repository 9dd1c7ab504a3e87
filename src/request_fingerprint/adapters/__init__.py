"""Adapters for external systems (configuration, HTTP)."""
