"""
Assertions With Report
----------------------

:class:`Asserts` checks conditions and writes the outcome to the report:
a PASS entry with the success message, or a FAIL entry with the failure
message.  Each check comes in two flavours:

``verify_*``
    Evaluate and report, returning a :class:`CheckResult`.
``assert_*``
    Same, then raise :class:`AssertionError` on failure.

Messages follow one convention everywhere: pass both
``success_message`` and ``failure_message``, or a single message that
is used for either outcome.  ``None`` or empty success messages are not
reported.

Example::

    asserts = Asserts(reporter)
    asserts.assert_equals("Nir", name, "Name is shown", "Wrong name shown")
"""

from __future__ import annotations

from typing import Any, Hashable, Optional

from ..reporting.reporter import MessageLevel, Reporter
from ..reporting import style
from .result import CheckResult


class Asserts:
    """Hard assertions that report every outcome and raise on failure."""

    def __init__(self, reporter: Reporter, context: Optional[Hashable] = None) -> None:
        self.reporter = reporter
        self.context = context

    # -- extension points -------------------------------------------------

    def _style_success(self, message: str, paired: bool) -> str:
        return message

    def _style_failure(self, message: str, paired: bool) -> str:
        return message

    def _on_failure(self, result: CheckResult) -> CheckResult:
        return result

    def _settle(self, result: CheckResult) -> CheckResult:
        return result.raise_for_failure()

    # -- core ---------------------------------------------------------------

    def verify(
        self,
        condition: bool,
        success_message: Optional[str] = None,
        failure_message: Optional[str] = None,
        *,
        report_success: bool = True,
        default_failure: str = "Condition is false",
    ) -> CheckResult:
        """Evaluate ``condition`` and report the outcome."""
        paired = bool(success_message) and bool(failure_message)
        if condition:
            if report_success and success_message:
                self.reporter.log(
                    MessageLevel.PASS,
                    style.to_report_text(self._style_success(success_message, paired)),
                    context=self.context,
                )
            return CheckResult.ok(success_message)
        text = failure_message or success_message or default_failure
        self.reporter.log(
            MessageLevel.FAIL,
            style.to_report_text(self._style_failure(text, paired)),
            context=self.context,
        )
        return self._on_failure(CheckResult.failed(text))

    def verify_true(self, condition: bool, success_message: Optional[str] = None,
                    failure_message: Optional[str] = None) -> CheckResult:
        return self.verify(bool(condition), success_message, failure_message)

    def verify_false(self, condition: bool, success_message: Optional[str] = None,
                     failure_message: Optional[str] = None) -> CheckResult:
        return self.verify(not condition, success_message, failure_message,
                           default_failure="Condition is true")

    def verify_equals(self, expected: Any, actual: Any, success_message: Optional[str] = None,
                      failure_message: Optional[str] = None) -> CheckResult:
        return self.verify(expected == actual, success_message, failure_message,
                           default_failure=f"Expected {expected!r} but was {actual!r}")

    def verify_not_equals(self, unexpected: Any, actual: Any, success_message: Optional[str] = None,
                          failure_message: Optional[str] = None) -> CheckResult:
        return self.verify(unexpected != actual, success_message, failure_message,
                           default_failure=f"Expected any value other than {unexpected!r}")

    def verify_none(self, actual: Any, success_message: Optional[str] = None,
                    failure_message: Optional[str] = None) -> CheckResult:
        return self.verify(actual is None, success_message, failure_message,
                           default_failure=f"Expected None but was {actual!r}")

    def verify_not_none(self, actual: Any, success_message: Optional[str] = None,
                        failure_message: Optional[str] = None) -> CheckResult:
        return self.verify(actual is not None, success_message, failure_message,
                           default_failure="Expected a value but was None")

    def verify_equals_report_failures_only(self, expected: Any, actual: Any,
                                           failure_message: Optional[str] = None) -> CheckResult:
        """Like :meth:`verify_equals` but nothing is reported on success."""
        return self.verify(expected == actual, None, failure_message, report_success=False,
                           default_failure=f"Expected {expected!r} but was {actual!r}")

    # -- raising variants ---------------------------------------------------

    def assert_true(self, condition, success_message=None, failure_message=None) -> CheckResult:
        return self._settle(self.verify_true(condition, success_message, failure_message))

    def assert_false(self, condition, success_message=None, failure_message=None) -> CheckResult:
        return self._settle(self.verify_false(condition, success_message, failure_message))

    def assert_equals(self, expected, actual, success_message=None, failure_message=None) -> CheckResult:
        return self._settle(self.verify_equals(expected, actual, success_message, failure_message))

    def assert_not_equals(self, unexpected, actual, success_message=None, failure_message=None) -> CheckResult:
        return self._settle(self.verify_not_equals(unexpected, actual, success_message, failure_message))

    def assert_none(self, actual, success_message=None, failure_message=None) -> CheckResult:
        return self._settle(self.verify_none(actual, success_message, failure_message))

    def assert_not_none(self, actual, success_message=None, failure_message=None) -> CheckResult:
        return self._settle(self.verify_not_none(actual, success_message, failure_message))

    def assert_equals_report_failures_only(self, expected, actual, failure_message=None) -> CheckResult:
        return self._settle(self.verify_equals_report_failures_only(expected, actual, failure_message))


__all__ = ["Asserts"]
