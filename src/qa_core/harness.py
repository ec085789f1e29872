"""
Automation Harness
------------------

The harness owns everything a test run shares: the store registry, the
driver registry, the reporter and the screenshot taker.  One harness is
created per run (the pytest plugin creates it in ``pytest_configure``)
and handed to test code, instead of the registries living in module
globals.  Tests built on separate harnesses never see each other's
state.

A *unit* is one logical test.  :meth:`AutomationHarness.begin_unit`
and :meth:`AutomationHarness.end_unit` bracket it: the execution
context's thread-local store is dropped on both sides and its driver is
released at the end, so nothing leaks into the next test that reuses
the same thread.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Hashable, Iterator, Optional

from selenium.common.exceptions import WebDriverException

from .assertions import Asserts, SoftAssertionCollector
from .config import Config
from .context import resolve_context
from .drivers.factory import create_driver
from .drivers.registry import DriverRegistry
from .reporting.reporter import MessageLevel, Reporter
from .reporting.screenshots import ScreenshotTaker
from .store import KeyValueStore, Scope, StoreRegistry
from .utils.logger import get_logger


# Outcomes after which the driver is screenshotted.
FAILED_OUTCOMES = ("failed", "broken")


class AutomationHarness:
    """Registries, reporter and lifecycle of one test run."""

    def __init__(self, config: Optional[Config] = None, driver_factory: Optional[Callable[[], Any]] = None) -> None:
        self.config = config if config is not None else Config()
        self.logger = get_logger(self.__class__.__name__)
        self.stores = StoreRegistry()
        self.drivers = DriverRegistry()
        self.reporter = Reporter(self.config)
        screenshots_dir = self.config.get("report.screenshots_dir") or Path(self.reporter.results_dir) / "images"
        self.take_screenshot = ScreenshotTaker(screenshots_dir, fallback=self.drivers.current)
        self.asserts = Asserts(self.reporter)
        self.driver_factory = driver_factory or (lambda: create_driver(self.config))

    # -- stores -------------------------------------------------------------

    def store(self, scope: Scope = Scope.THREAD_LOCAL, context: Optional[Hashable] = None) -> KeyValueStore:
        return self.stores.get_store(scope, context)

    # -- units --------------------------------------------------------------

    def begin_unit(self, name: str, description: Optional[str] = None, context: Optional[Hashable] = None) -> Hashable:
        """Start a logical test on the calling (or given) context."""
        key = resolve_context(context)
        self.stores.remove_store(Scope.THREAD_LOCAL, key)
        self.reporter.start_test(name, description, context=key)
        return key

    def end_unit(self, outcome: str = "passed", message: Optional[str] = None,
                 context: Optional[Hashable] = None, screenshot_on_failure: bool = True) -> None:
        """Finish the logical test: release its driver and thread-local store.

        A failed or broken unit that still has a driver is screenshotted
        first, unless ``screenshot_on_failure`` is off (non-UI tests).
        """
        key = resolve_context(context)
        if screenshot_on_failure and outcome in FAILED_OUTCOMES:
            self.capture_failure(key)
        self.stop_driver(key)
        self.stores.remove_store(Scope.THREAD_LOCAL, key)
        self.reporter.end_test(outcome, message, context=key)

    @contextmanager
    def unit(self, name: str, description: Optional[str] = None) -> Iterator[Hashable]:
        """Run a block as one unit; the outcome follows from the exception, if any."""
        key = self.begin_unit(name, description)
        try:
            yield key
        except AssertionError as exc:
            self.end_unit("failed", str(exc), context=key)
            raise
        except Exception as exc:
            self.end_unit("broken", f"{type(exc).__name__}: {exc}", context=key)
            raise
        else:
            self.end_unit("passed", context=key)

    # -- drivers ------------------------------------------------------------

    def capture_failure(self, context: Optional[Hashable] = None) -> Optional[str]:
        """Screenshot the context's driver and attach its page source.

        Returns the screenshot path, or ``None`` when there is no driver or
        the capture failed.
        """
        key = resolve_context(context)
        driver = self.drivers.current(key)
        if driver is None:
            return None
        path = self.take_screenshot(driver)
        if path:
            self.reporter.log(MessageLevel.FAIL, "Screenshot at failure", screenshot_path=path, context=key)
        try:
            page_source = getattr(driver, "page_source", None)
        except WebDriverException as exc:
            self.logger.warning("Could not read page source: %s", exc)
            page_source = None
        if isinstance(page_source, str) and page_source:
            self.reporter.attach_text(page_source, name="page_source")
        return path

    def start_driver(self, context: Optional[Hashable] = None) -> Any:
        """Create a driver with the harness factory and register it."""
        driver = self.driver_factory()
        self.drivers.register(driver, context)
        return driver

    def stop_driver(self, context: Optional[Hashable] = None) -> None:
        """Quit and unregister the context's driver, if it has one."""
        driver = self.drivers.unregister(context)
        if driver is None:
            return
        quit_driver = getattr(driver, "quit", None)
        if quit_driver is None:
            return
        try:
            quit_driver()
        except Exception as exc:
            self.logger.warning("Failed to quit driver: %s", exc)

    # -- assertions ---------------------------------------------------------

    def soft_asserts(self, context: Optional[Hashable] = None) -> SoftAssertionCollector:
        return SoftAssertionCollector(self.reporter, self.drivers, self.take_screenshot, context)

    def close(self) -> None:
        """Quit drivers that were never released."""
        leftovers = self.drivers.active()
        if leftovers:
            self.logger.warning("Quitting %d driver(s) left registered at shutdown", len(leftovers))
        for key in leftovers:
            self.stop_driver(key)


__all__ = ["AutomationHarness"]
