"""Shared fixtures and fake drivers for the qa-core test suite."""

from pathlib import Path

import pytest
from selenium.common.exceptions import InvalidSessionIdException, WebDriverException

from qa_core.config import Config
from qa_core.drivers.registry import DriverRegistry
from qa_core.harness import AutomationHarness
from qa_core.reporting.reporter import Reporter
from qa_core.reporting.screenshots import ScreenshotTaker

PNG_BYTES = b"\x89PNG\r\n\x1a\n"


class FakeDriver:
    """Stands in for a Selenium/Appium driver."""

    def __init__(self, name: str = "fake") -> None:
        self.name = name
        self.quit_called = False
        self.screenshots = []

    def save_screenshot(self, path: str) -> bool:
        Path(path).write_bytes(PNG_BYTES)
        self.screenshots.append(path)
        return True

    def quit(self) -> None:
        self.quit_called = True


class BrokenScreenshotDriver(FakeDriver):
    def save_screenshot(self, path: str) -> bool:
        raise WebDriverException("screenshot not supported")


class LostSessionDriver(FakeDriver):
    def save_screenshot(self, path: str) -> bool:
        raise InvalidSessionIdException("invalid session id")


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        yaml_path=str(tmp_path / "missing.yaml"),
        overrides={"report.dir": str(tmp_path / "reports")},
    )


@pytest.fixture
def reporter(config) -> Reporter:
    return Reporter(config)


@pytest.fixture
def drivers() -> DriverRegistry:
    return DriverRegistry()


@pytest.fixture
def capture(tmp_path, drivers) -> ScreenshotTaker:
    return ScreenshotTaker(tmp_path / "images", fallback=drivers.current)


@pytest.fixture
def harness(config) -> AutomationHarness:
    h = AutomationHarness(config, driver_factory=FakeDriver)
    yield h
    h.close()
