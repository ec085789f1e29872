"""
Soft Assertions With Report
---------------------------

A :class:`SoftAssertionCollector` checks conditions like
:class:`~qa_core.assertions.hard.Asserts` but never raises for a failed
check.  Each failure is reported, screenshotted when the calling
context has a registered driver, and remembered.  :meth:`assert_all`
ends the sequence: it passes silently if nothing failed and otherwise
raises one :class:`~qa_core.errors.SoftAssertionError` listing every
failure in the order it happened.

The screenshot is taken when the check fails, not when the collector
is finalized, because by then the page may look different.

A collector belongs to the test that created it and is not shared
between threads.

Example::

    soft = SoftAssertionCollector(reporter, drivers, capture)
    soft.assert_true(form.is_displayed(), "Form shown", "Form missing")
    soft.assert_equals("a", field.text, "Field ok", "Field wrong")
    soft.assert_all()
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, List, Optional, Tuple

from ..drivers.registry import DriverRegistry
from ..errors import CollectorFinalizedError, SoftAssertionError
from ..reporting import style
from ..reporting.reporter import MessageLevel, Reporter
from ..utils.logger import get_logger
from .hard import Asserts
from .result import AssertionFailure, CheckResult


logger = get_logger(__name__)

Capture = Callable[[Any], Optional[str]]


class SoftAssertionCollector(Asserts):
    """Collect failed checks and raise them together on :meth:`assert_all`."""

    def __init__(
        self,
        reporter: Reporter,
        drivers: Optional[DriverRegistry] = None,
        capture: Optional[Capture] = None,
        context: Optional[Hashable] = None,
    ) -> None:
        super().__init__(reporter, context)
        self.drivers = drivers
        self.capture = capture
        self._failures: List[AssertionFailure] = []
        self._finalized = False

    @property
    def failures(self) -> Tuple[AssertionFailure, ...]:
        return tuple(self._failures)

    @property
    def has_failures(self) -> bool:
        return bool(self._failures)

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _style_success(self, message: str, paired: bool) -> str:
        return style.success_message(message) if paired else message

    def _style_failure(self, message: str, paired: bool) -> str:
        return style.failure_message(message) if paired else message

    def _settle(self, result: CheckResult) -> CheckResult:
        return result

    def verify(self, condition, success_message=None, failure_message=None, **kwargs) -> CheckResult:
        if self._finalized:
            raise CollectorFinalizedError("assert_all() was already called on this collector")
        return super().verify(condition, success_message, failure_message, **kwargs)

    def check_condition(self, condition: bool, success_message: Optional[str] = None,
                        failure_message: Optional[str] = None) -> CheckResult:
        """Evaluate ``condition``; a failure is recorded instead of raised."""
        return self.verify_true(condition, success_message, failure_message)

    def _on_failure(self, result: CheckResult) -> CheckResult:
        screenshot_path = self._capture_screenshot()
        if screenshot_path:
            self.reporter.log(MessageLevel.FAIL, "Screenshot at failure", screenshot_path=screenshot_path,
                              context=self.context)
        failure = AssertionFailure(
            message=result.message or "",
            position=len(self._failures),
            screenshot_path=screenshot_path,
            context=self.context,
        )
        self._failures.append(failure)
        logger.debug("Recorded soft assertion failure #%d: %s", failure.position + 1, failure.message)
        return result

    def _capture_screenshot(self) -> Optional[str]:
        if self.drivers is None or self.capture is None:
            return None
        driver = self.drivers.current(self.context)
        # Non-UI tests have no driver; the failure is kept without a screenshot.
        if driver is None:
            return None
        try:
            return self.capture(driver)
        except Exception as exc:
            logger.warning("Screenshot capture failed, recording failure without it: %s", exc)
            return None

    def assert_all(self) -> None:
        """Finish the sequence: raise if any check failed."""
        if self._finalized:
            raise CollectorFinalizedError("assert_all() was already called on this collector")
        self._finalized = True
        if not self._failures:
            self.reporter.log(MessageLevel.PASS, style.success_message("All soft assertions passed"),
                              context=self.context)
            return
        self.reporter.log(
            MessageLevel.FAIL,
            style.failure_message(f"Test failed on {len(self._failures)} soft assertion(s)"),
            context=self.context,
        )
        raise SoftAssertionError(self._failures)

    finalize_all = assert_all


__all__ = ["SoftAssertionCollector"]
