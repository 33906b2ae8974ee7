"""Utility modules for tinta.

Provides:
- logger: get_logger for logging
"""

from tinta.utils.logger import get_logger

__all__ = ["get_logger"]
