"""
Driver Factory
--------------

Builds the driver a UI test runs against.  Which driver is built is
decided by configuration:

* ``driver.factory`` – a ``module:callable`` path.  The callable is
  invoked with the :class:`~qa_core.config.Config` and its return
  value is used as-is.  This is how suites plug in their own drivers.
* ``driver.platform`` – ``web`` (default) builds a Selenium driver,
  ``android`` or ``ios`` builds an Appium driver.

The built-in factories only cover connection settings (browser,
headless mode, remote URL, capabilities); anything richer belongs in a
custom factory.
"""

from __future__ import annotations

import importlib
from typing import Any, Callable

from appium import webdriver as appium_webdriver
from appium.options.common import AppiumOptions
from selenium import webdriver
from selenium.common.exceptions import WebDriverException

from ..config import Config
from ..errors import DriverFactoryError
from ..utils.logger import get_logger


logger = get_logger(__name__)

DriverFactory = Callable[[Config], Any]

_OPTIONS = {
    "chrome": webdriver.ChromeOptions,
    "firefox": webdriver.FirefoxOptions,
    "edge": webdriver.EdgeOptions,
}

_LOCAL_DRIVERS = {
    "chrome": webdriver.Chrome,
    "firefox": webdriver.Firefox,
    "edge": webdriver.Edge,
}

_DEFAULT_APPIUM_URL = "http://127.0.0.1:4723"


def load_factory(path: str) -> DriverFactory:
    """Resolve a ``module:callable`` path to a driver factory."""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise DriverFactoryError(f"Driver factory must look like 'module:callable', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise DriverFactoryError(f"Cannot import driver factory module {module_name!r}: {exc}") from exc
    factory = getattr(module, attr, None)
    if not callable(factory):
        raise DriverFactoryError(f"{path!r} is not a callable driver factory")
    return factory


def create_selenium_driver(config: Config) -> Any:
    """Create a local or remote Selenium WebDriver."""
    browser = str(config.get("driver.browser", "chrome")).lower()
    options_cls = _OPTIONS.get(browser)
    if options_cls is None:
        raise DriverFactoryError(f"Unsupported browser {browser!r}; expected one of {sorted(_OPTIONS)}")
    options = options_cls()
    if config.get_bool("driver.headless", True):
        options.add_argument("-headless" if browser == "firefox" else "--headless=new")
    for argument in config.get("driver.arguments", []) or []:
        options.add_argument(str(argument))

    remote_url = config.get("driver.remote_url")
    logger.info("Starting %s driver%s", browser, f" on {remote_url}" if remote_url else "")
    if remote_url:
        return webdriver.Remote(command_executor=remote_url, options=options)
    return _LOCAL_DRIVERS[browser](options=options)


def create_appium_driver(config: Config) -> Any:
    """Create an Appium driver from ``driver.capabilities``."""
    capabilities = dict(config.get("driver.capabilities", {}) or {})
    platform = str(config.get("driver.platform", "android"))
    capabilities.setdefault("platformName", platform.capitalize() if platform != "ios" else "iOS")
    options = AppiumOptions()
    options.load_capabilities(capabilities)
    remote_url = config.get("driver.remote_url", _DEFAULT_APPIUM_URL)
    logger.info("Starting Appium %s session on %s", capabilities["platformName"], remote_url)
    return appium_webdriver.Remote(command_executor=remote_url, options=options)


def create_driver(config: Config) -> Any:
    """Build a driver according to ``config`` (see module docstring)."""
    factory_path = config.get("driver.factory")
    if factory_path:
        factory = load_factory(str(factory_path))
    elif str(config.get("driver.platform", "web")).lower() in ("android", "ios"):
        factory = create_appium_driver
    else:
        factory = create_selenium_driver
    try:
        return factory(config)
    except WebDriverException as exc:
        raise DriverFactoryError(f"Driver could not be started: {exc.msg or exc}") from exc


__all__ = [
    "DriverFactory",
    "create_driver",
    "create_selenium_driver",
    "create_appium_driver",
    "load_factory",
]
