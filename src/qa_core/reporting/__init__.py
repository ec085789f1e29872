"""
Reporting subpackage: the shared report sink, message styling and
screenshot capture.
"""

from . import style
from .reporter import MessageLevel, ReportEntry, Reporter
from .screenshots import ScreenshotTaker

__all__ = ["MessageLevel", "ReportEntry", "Reporter", "ScreenshotTaker", "style"]
