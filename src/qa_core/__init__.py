"""
qa-core
=======

Support library for parallel UI and API test suites.  It keeps the
state that concurrent tests must not share apart, while letting all of
them write to one report.

Modules
-------

``store``
    Key/value stores scoped globally or per execution context.

``drivers``
    Registry of the driver used by each execution context, and the
    Selenium/Appium driver factory.

``assertions``
    Hard and soft assertions that report their outcome and capture a
    screenshot on soft failures.

``reporting``
    Thread-safe Allure-backed report sink, message styling and
    screenshot capture.

``harness``
    Owner of the registries for one test run, with the per-test
    lifecycle.

``executor``
    Thread pool that runs units in isolated execution contexts.

``plugin``
    pytest integration: lifecycle hooks and fixtures.
"""

from .assertions import AssertionFailure, Asserts, CheckResult, SoftAssertionCollector
from .config import Config
from .context import current_context, execution_context
from .drivers.registry import DriverRegistry
from .errors import CollectorFinalizedError, DriverFactoryError, QACoreError, SoftAssertionError
from .executor import ParallelExecutor
from .harness import AutomationHarness
from .reporting import MessageLevel, Reporter
from .store import KeyValueStore, Scope, StoreRegistry

__version__ = "0.1.0"

__all__ = [
    "AssertionFailure",
    "Asserts",
    "AutomationHarness",
    "CheckResult",
    "CollectorFinalizedError",
    "Config",
    "DriverFactoryError",
    "DriverRegistry",
    "KeyValueStore",
    "MessageLevel",
    "ParallelExecutor",
    "QACoreError",
    "Reporter",
    "Scope",
    "SoftAssertionCollector",
    "SoftAssertionError",
    "StoreRegistry",
    "current_context",
    "execution_context",
]
