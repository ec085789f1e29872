"""
pytest Plugin
-------------

Wires the harness into pytest's test lifecycle.  The plugin is loaded
automatically through the ``pytest11`` entry point once the package is
installed.

Lifecycle
    ``pytest_configure`` creates one :class:`AutomationHarness` for the
    session; ``pytest_unconfigure`` closes it.  The autouse ``qa_unit``
    fixture begins a unit for every test and the teardown report ends
    it, so each test starts with an empty thread-local store and
    teardown errors count as failures.  The driver of a failed test not
    marked ``non_ui`` is screenshotted, with its page source attached,
    before it quits.

Fixtures
    ``qa_harness``        the session harness
    ``qa_driver_factory`` zero-argument callable building a driver;
                          override it in ``conftest.py`` to plug in your own
    ``qa_driver``         driver registered for the test (``None`` for
                          tests marked ``non_ui``)
    ``qa_store``          the test's thread-local store
    ``qa_global_store``   the store shared by all tests
    ``qa_asserts``        hard assertions writing to the report
    ``qa_soft_asserts``   soft assertion collector; if the test never
                          calls ``assert_all()`` on it, teardown does

Options
    ``--qa-config PATH``  YAML configuration file (see :mod:`qa_core.config`)
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Hashable, Iterator, Optional, Tuple

import pytest

from .assertions import Asserts, SoftAssertionCollector
from .config import Config
from .harness import FAILED_OUTCOMES, AutomationHarness
from .store import KeyValueStore, Scope
from .utils.logger import get_logger


logger = get_logger(__name__)

HARNESS_KEY = pytest.StashKey[AutomationHarness]()
UNIT_KEY = pytest.StashKey[Hashable]()


def pytest_addoption(parser):
    group = parser.getgroup("qa-core", "qa-core options")
    group.addoption(
        "--qa-config",
        action="store",
        dest="qa_config",
        default=None,
        help="Path to the qa-core YAML configuration (default: config/config.yaml)",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "non_ui: the test runs without a browser/automation driver")
    config.stash[HARNESS_KEY] = AutomationHarness(Config(config.getoption("qa_config")))


def pytest_unconfigure(config):
    harness = config.stash.get(HARNESS_KEY, None)
    if harness is not None:
        harness.close()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    # Keep each phase's report on the item; the unit ends once teardown is reported.
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"qa_report_{report.when}", report)
    if report.when == "teardown" and UNIT_KEY in item.stash:
        key = item.stash[UNIT_KEY]
        del item.stash[UNIT_KEY]
        state, message = _unit_outcome(item)
        item.config.stash[HARNESS_KEY].end_unit(
            state, message, context=key, screenshot_on_failure=not _is_non_ui(item)
        )


def _unit_outcome(item) -> Tuple[str, Optional[str]]:
    setup = getattr(item, "qa_report_setup", None)
    call = getattr(item, "qa_report_call", None)
    teardown = getattr(item, "qa_report_teardown", None)
    if call is None:
        if setup is not None and setup.failed:
            return "broken", _last_line(setup.longreprtext)
        return "skipped", None
    if call.failed:
        return "failed", _last_line(call.longreprtext)
    if call.skipped:
        return "skipped", None
    # Errors raised while tearing down (unfinalized soft assertions) fail the unit.
    if teardown is not None and teardown.failed:
        return "failed", _last_line(teardown.longreprtext)
    return "passed", None


def _last_line(text: str) -> Optional[str]:
    lines = [line for line in text.splitlines() if line.strip()]
    return lines[-1] if lines else None


def _is_non_ui(item) -> bool:
    return item.get_closest_marker("non_ui") is not None


@pytest.fixture(scope="session")
def qa_harness(pytestconfig) -> AutomationHarness:
    return pytestconfig.stash[HARNESS_KEY]


@pytest.fixture(scope="session")
def qa_driver_factory(qa_harness: AutomationHarness) -> Callable[[], Any]:
    return qa_harness.driver_factory


@pytest.fixture(autouse=True)
def qa_unit(request, qa_harness: AutomationHarness) -> Hashable:
    """Begin a unit for the test.

    The unit is ended by ``pytest_runtest_makereport`` once the teardown
    report exists, so errors raised by other fixtures' teardown are part
    of the outcome.
    """
    function = getattr(request.node, "function", None)
    description = inspect.getdoc(function) if function is not None else None
    key = qa_harness.begin_unit(request.node.nodeid, description)
    request.node.stash[UNIT_KEY] = key
    return key


@pytest.fixture
def qa_driver(request, qa_harness: AutomationHarness, qa_driver_factory, qa_unit) -> Iterator[Any]:
    if _is_non_ui(request.node):
        yield None
        return
    driver = qa_driver_factory()
    qa_harness.drivers.register(driver, qa_unit)
    yield driver
    outcome, _ = _unit_outcome(request.node)
    if outcome in FAILED_OUTCOMES:
        qa_harness.capture_failure(qa_unit)
    qa_harness.stop_driver(qa_unit)


@pytest.fixture
def qa_store(qa_harness: AutomationHarness, qa_unit) -> KeyValueStore:
    return qa_harness.store(Scope.THREAD_LOCAL, qa_unit)


@pytest.fixture
def qa_global_store(qa_harness: AutomationHarness) -> KeyValueStore:
    return qa_harness.store(Scope.GLOBAL)


@pytest.fixture
def qa_asserts(qa_harness: AutomationHarness, qa_unit) -> Asserts:
    return Asserts(qa_harness.reporter, qa_unit)


@pytest.fixture
def qa_soft_asserts(qa_harness: AutomationHarness, qa_unit) -> Iterator[SoftAssertionCollector]:
    collector = qa_harness.soft_asserts(qa_unit)
    yield collector
    if not collector.finalized and collector.has_failures:
        logger.warning("Soft assertions were not finalized by the test, raising them at teardown")
        collector.assert_all()
