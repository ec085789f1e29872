"""
Utility subpackage.

Only the logger lives here; everything else in the library imports it
as ``from ..utils import get_logger``.
"""

from .logger import get_logger

__all__ = ["get_logger"]
