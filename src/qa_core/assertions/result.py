"""
Check Results
-------------

Assertion helpers in this package evaluate a condition into a
:class:`CheckResult` instead of raising.  Raising is left to the
outermost caller: hard assertions call :meth:`CheckResult.raise_for_failure`
right away, soft assertions store the failure as an
:class:`AssertionFailure` and raise once, when finalized.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional


@dataclass(frozen=True)
class CheckResult:
    passed: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls, message: Optional[str] = None) -> "CheckResult":
        return cls(True, message)

    @classmethod
    def failed(cls, message: str) -> "CheckResult":
        return cls(False, message)

    def __bool__(self) -> bool:
        return self.passed

    def raise_for_failure(self) -> "CheckResult":
        """Raise :class:`AssertionError` if the check failed, else return self."""
        if not self.passed:
            raise AssertionError(self.message)
        return self


@dataclass(frozen=True)
class AssertionFailure:
    """A failed soft check, in the order it was recorded."""

    message: str
    position: int
    screenshot_path: Optional[str] = None
    context: Optional[Hashable] = None


__all__ = ["CheckResult", "AssertionFailure"]
