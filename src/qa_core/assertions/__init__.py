"""
Assertion helpers that report their outcome.

``Asserts`` raises on the first failed check; ``SoftAssertionCollector``
records failures and raises them together when finalized.
"""

from .hard import Asserts
from .result import AssertionFailure, CheckResult
from .soft import SoftAssertionCollector

__all__ = ["Asserts", "AssertionFailure", "CheckResult", "SoftAssertionCollector"]
