"""
Errors
------

Exception types raised by the library.  Absence (a missing store
entry, no registered driver, an empty failure list) is never an error
and has no exception here.
"""

from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .assertions.result import AssertionFailure


class QACoreError(Exception):
    """Base class for library errors that are not test failures."""


class DriverFactoryError(QACoreError):
    """A configured driver factory could not be resolved or called."""


class CollectorFinalizedError(QACoreError, RuntimeError):
    """A soft assertion collector was used after ``assert_all``."""


class SoftAssertionError(AssertionError):
    """Aggregate failure raised when a soft assertion collector is finalized.

    The message lists every recorded failure in the order it was
    recorded.  The individual records stay available on ``failures``.
    """

    def __init__(self, failures: Sequence["AssertionFailure"]) -> None:
        self.failures = tuple(failures)
        super().__init__(self._format(self.failures))

    @staticmethod
    def _format(failures: Sequence["AssertionFailure"]) -> str:
        lines = [f"{len(failures)} soft assertion(s) failed:"]
        for failure in failures:
            line = f"  {failure.position + 1}. {failure.message}"
            if failure.screenshot_path:
                line += f" (screenshot: {failure.screenshot_path})"
            lines.append(line)
        return "\n".join(lines)


__all__ = [
    "QACoreError",
    "DriverFactoryError",
    "CollectorFinalizedError",
    "SoftAssertionError",
]
