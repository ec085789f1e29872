"""
Harness Tests
-------------

Unit lifecycle: thread-local state is reset between units on the same
thread, drivers are released, and harnesses do not share state.
"""

import pytest

from qa_core.errors import SoftAssertionError
from qa_core.harness import AutomationHarness
from qa_core.reporting import MessageLevel
from qa_core.store import Scope

from conftest import FakeDriver


def test_units_on_same_thread_do_not_leak(harness: AutomationHarness) -> None:
    with harness.unit("first"):
        harness.store().put("USER", "Nir")
        harness.store(Scope.GLOBAL).put("RUN_ID", 42)
    with harness.unit("second"):
        assert harness.store().get("USER") is None
        assert harness.store(Scope.GLOBAL).get("RUN_ID") == 42


def test_begin_unit_clears_stale_state(harness: AutomationHarness) -> None:
    harness.store().put("STALE", True)
    harness.begin_unit("fresh")
    assert harness.store().get("STALE") is None
    harness.end_unit()


def test_driver_released_at_end_of_unit(harness: AutomationHarness) -> None:
    with harness.unit("ui"):
        driver = harness.start_driver()
        assert harness.drivers.current() is driver
    assert driver.quit_called
    assert harness.drivers.current() is None


def test_unit_outcomes_are_reported(harness: AutomationHarness) -> None:
    with harness.unit("passes"):
        pass
    with pytest.raises(AssertionError):
        with harness.unit("fails"):
            raise AssertionError("wrong total")
    with pytest.raises(ValueError):
        with harness.unit("breaks"):
            raise ValueError("bad data")

    reporter = harness.reporter
    assert reporter.entries(test="passes")[-1].level is MessageLevel.PASS
    assert reporter.entries(test="fails")[-1].message == "wrong total"
    assert "ValueError: bad data" in reporter.entries(test="breaks")[-1].message


def test_soft_asserts_capture_unit_driver(harness: AutomationHarness) -> None:
    with pytest.raises(SoftAssertionError):
        with harness.unit("form"):
            harness.start_driver()
            soft = harness.soft_asserts()
            soft.assert_equals("Nir", "Dan", "name ok", "name wrong")
            soft.assert_all()
    assert soft.failures[0].screenshot_path is not None


def test_stop_driver_tolerates_quit_errors(harness: AutomationHarness) -> None:
    class StuckDriver(FakeDriver):
        def quit(self) -> None:
            raise RuntimeError("browser hung")

    harness.drivers.register(StuckDriver())
    harness.stop_driver()
    assert harness.drivers.current() is None


def test_close_quits_leftover_drivers(harness: AutomationHarness) -> None:
    leftovers = [FakeDriver("a"), FakeDriver("b")]
    harness.drivers.register(leftovers[0], context="unit-a")
    harness.drivers.register(leftovers[1], context="unit-b")
    harness.close()
    assert all(d.quit_called for d in leftovers)
    assert len(harness.drivers) == 0


def test_harnesses_are_independent(config) -> None:
    first = AutomationHarness(config, driver_factory=FakeDriver)
    second = AutomationHarness(config, driver_factory=FakeDriver)
    first.store(Scope.GLOBAL).put("K", "first")
    assert second.store(Scope.GLOBAL).get("K") is None


def test_failed_unit_screenshots_its_driver(harness: AutomationHarness) -> None:
    with pytest.raises(AssertionError):
        with harness.unit("checkout"):
            driver = harness.start_driver()
            raise AssertionError("total is wrong")

    shots = [e for e in harness.reporter.entries(test="checkout") if e.screenshot_path]
    assert [e.screenshot_path for e in shots] == driver.screenshots
    assert len(shots) == 1
    assert driver.quit_called


def test_non_ui_unit_skips_failure_screenshot(harness: AutomationHarness) -> None:
    key = harness.begin_unit("api")
    driver = harness.start_driver(key)
    harness.end_unit("failed", "bad status", context=key, screenshot_on_failure=False)
    assert driver.screenshots == []
    assert harness.capture_failure(key) is None
