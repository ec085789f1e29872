"""
Allure Reporting Wrapper
------------------------

This module provides the report sink shared by every test thread.  The
:class:`Reporter` accepts leveled entries, optionally with a screenshot,
and

* writes them to the Python logger with report markup removed,
* keeps an ordered in-memory record attributed to the test running on
  the calling execution context, and
* forwards them to Allure as steps and attachments.

All writes go through one lock, so entries carry a total order even
when many tests report at once.  Allure calls made outside a running
Allure test are no-ops, which keeps the reporter usable from plain
scripts.
"""

from __future__ import annotations

import itertools
import threading
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Hashable, List, Optional

import allure

from ..context import resolve_context
from ..utils.logger import get_logger
from . import style


class MessageLevel(str, Enum):
    INFO = "INFO"
    PASS = "PASS"
    WARN = "WARN"
    ERROR = "ERROR"
    FAIL = "FAIL"


_LOG_METHODS = {
    MessageLevel.INFO: "info",
    MessageLevel.PASS: "info",
    MessageLevel.WARN: "warning",
    MessageLevel.ERROR: "error",
    MessageLevel.FAIL: "error",
}


@dataclass(frozen=True)
class ReportEntry:
    """One line of the report."""

    sequence: int
    level: MessageLevel
    message: str
    test: Optional[str]
    context: Hashable
    screenshot_path: Optional[str] = None
    timestamp: float = 0.0


class Reporter:
    """Thread-safe report sink backed by the logger and Allure."""

    def __init__(self, config: Any = None) -> None:
        self.config = config
        self.logger = get_logger(self.__class__.__name__)
        report_dir = config.get("report.dir", "reports") if config is not None else "reports"
        self.results_dir = Path(report_dir)
        self._lock = threading.Lock()
        self._sequence = itertools.count()
        self._entries: List[ReportEntry] = []
        self._tests: Dict[Hashable, str] = {}

    # -- test lifecycle -------------------------------------------------

    def start_test(self, name: str, description: Optional[str] = None, context: Optional[Hashable] = None) -> None:
        """Attribute subsequent entries of the context to test ``name``."""
        key = resolve_context(context)
        with self._lock:
            self._tests[key] = name
        if description:
            allure.dynamic.description(description)
        self.logger.info("START TEST %s", name)

    def end_test(self, outcome: str, message: Optional[str] = None, context: Optional[Hashable] = None) -> None:
        """Record the test's outcome and detach the context from it."""
        key = resolve_context(context)
        if outcome == "passed":
            self.log(MessageLevel.PASS, "Finished with success", context=key)
        elif outcome == "failed":
            self.log(MessageLevel.FAIL, message or "Finished with failure", context=key)
        else:
            self.log(MessageLevel.INFO, f"Finished: {outcome}" + (f" ({message})" if message else ""), context=key)
        with self._lock:
            name = self._tests.pop(key, None)
        self.logger.info("END TEST %s (%s)", name, outcome)

    def current_test(self, context: Optional[Hashable] = None) -> Optional[str]:
        return self._tests.get(resolve_context(context))

    # -- entries ----------------------------------------------------------

    def log(
        self,
        level: MessageLevel,
        message: str,
        screenshot_path: Optional[str] = None,
        context: Optional[Hashable] = None,
    ) -> ReportEntry:
        """Write one entry to the log, the in-memory record and Allure."""
        level = MessageLevel(level)
        key = resolve_context(context)
        plain = style.strip_html_for_log(message)
        with self._lock:
            entry = ReportEntry(
                sequence=next(self._sequence),
                level=level,
                message=message,
                test=self._tests.get(key),
                context=key,
                screenshot_path=screenshot_path,
                timestamp=time.time(),
            )
            self._entries.append(entry)
            getattr(self.logger, _LOG_METHODS[level])(
                "%s%s", plain, f" [screenshot: {screenshot_path}]" if screenshot_path else ""
            )
            self._forward_to_allure(level, message, plain, screenshot_path)
        return entry

    def _forward_to_allure(self, level: MessageLevel, message: str, plain: str, screenshot_path: Optional[str]) -> None:
        title = plain.replace("\n", " ").strip() or level.value
        with allure.step(f"{level.value}: {title}"):
            if style.has_markup(message):
                allure.attach(message, name=level.value, attachment_type=allure.attachment_type.HTML)
            if screenshot_path:
                if Path(screenshot_path).is_file():
                    allure.attach.file(screenshot_path, name="screenshot", attachment_type=allure.attachment_type.PNG)
                else:
                    self.logger.warning("Screenshot %s does not exist, not attached", screenshot_path)

    def report_and_log(self, message: str, level: MessageLevel = MessageLevel.INFO) -> ReportEntry:
        """Report ``message`` with newlines rendered as report line breaks."""
        return self.log(level, style.to_report_text(message))

    def report_bug(self, details: str) -> ReportEntry:
        """Report a highlighted bug line."""
        return self.log(MessageLevel.WARN, style.marked_message(details))

    def attach_text(self, text: str, name: str = "attachment") -> None:
        """Attach plain text to the report."""
        allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)
        self.logger.debug("Text attachment %s:\n%s", name, text)

    def entries(self, test: Optional[str] = None) -> List[ReportEntry]:
        """Return recorded entries in order, optionally only those of ``test``."""
        with self._lock:
            if test is None:
                return list(self._entries)
            return [entry for entry in self._entries if entry.test == test]


__all__ = ["MessageLevel", "ReportEntry", "Reporter"]
