"""Configuration adapters."""

from request_fingerprint.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
