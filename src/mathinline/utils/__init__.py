"""Utility helpers for mathinline."""

from mathinline.utils.logger import get_logger

__all__ = ["get_logger"]
