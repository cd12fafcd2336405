"""Logging helpers for textbinder."""

from .logger import get_module_logger, setup_logging

__all__ = ["get_module_logger", "setup_logging"]
