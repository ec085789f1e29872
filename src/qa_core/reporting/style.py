"""
Report Style
------------

Small helpers that wrap report messages in inline HTML so successes,
failures and notes stand out in the report.  The log never shows the
markup: :func:`strip_html_for_log` removes it before a message is
written to the Python logger.

Every helper returns ``None`` unchanged, which lets callers pass an
optional message straight through.
"""

from __future__ import annotations

import re
from typing import Optional

SUCCESS_COLOR = "rgb(192,251,134)"
FAILURE_COLOR = "rgb(252,177,158)"
INFO_COLOR = "rgb(192,254,237)"

# Only the tags report messages are built with; any other "<" or ">" is text.
_TAG_RE = re.compile(r"</?(?:br|b|mark)\s*/?>|</?span(?:\s[^<>]*)?>", re.IGNORECASE)


def highlighted_message(message: Optional[str], bg_color: str) -> Optional[str]:
    """Wrap ``message`` in a span with the given background colour.

    The colour can be a CSS name (``red``) or an ``rgb(...)`` value.
    """
    if message is None:
        return None
    return f'<span style="background-color:{bg_color}; color:black">{message}</span>'


def success_message(message: Optional[str]) -> Optional[str]:
    return highlighted_message(message, SUCCESS_COLOR)


def failure_message(message: Optional[str]) -> Optional[str]:
    return highlighted_message(message, FAILURE_COLOR)


def info_message(message: Optional[str]) -> Optional[str]:
    return highlighted_message(message, INFO_COLOR)


def marked_message(message: Optional[str]) -> Optional[str]:
    """Highlight ``message`` in bright yellow."""
    if message is None:
        return None
    return f"<mark>{message}</mark>"


def to_report_text(message: str) -> str:
    """Turn newlines (including the literal ``/n`` some suites write) into ``<br/>``."""
    return message.replace("/n", "<br/>").replace("\n", "<br/>")


def strip_html_for_log(message: str) -> str:
    """Remove the markup that only makes sense in the report, keeping line breaks."""
    return strip_all_html(message.replace("<br/>", "\n"))


def strip_all_html(message: str) -> str:
    return _TAG_RE.sub("", message)


def has_markup(message: str) -> bool:
    return bool(_TAG_RE.search(message))


__all__ = [
    "highlighted_message",
    "success_message",
    "failure_message",
    "info_message",
    "marked_message",
    "to_report_text",
    "strip_html_for_log",
    "strip_all_html",
    "has_markup",
]
