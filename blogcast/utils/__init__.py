"""Shared utilities."""

from blogcast.utils.logging_config import configure_logging, logging_config, mask_value

__all__ = ["configure_logging", "logging_config", "mask_value"]
