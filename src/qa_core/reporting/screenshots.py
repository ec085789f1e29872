"""
Screenshot Capture
------------------

:class:`ScreenshotTaker` saves a screenshot of a driver to a uniquely
named PNG and returns its path.  It understands Selenium and Appium
drivers (``save_screenshot``) and Playwright pages (``screenshot``).

Capture is a side concern of reporting: a failure here is logged and
reported as "no screenshot" (``None``), never raised.  When the driver
handed in has lost its session the capture is retried once with the
fallback driver, normally the one currently registered for the calling
context.
"""

from __future__ import annotations

import itertools
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Union

from selenium.common.exceptions import InvalidSessionIdException

from ..utils.logger import get_logger


logger = get_logger(__name__)

_counter = itertools.count()
_counter_lock = threading.Lock()


def unique_timestamp() -> str:
    """Timestamp with a process-wide counter so parallel captures never collide."""
    with _counter_lock:
        serial = next(_counter)
    return f"{datetime.now():%Y%m%d_%H%M%S_%f}_{serial}"


class ScreenshotTaker:
    """Callable ``(driver) -> path`` that stores screenshots in ``directory``."""

    def __init__(self, directory: Union[str, Path], fallback: Optional[Callable[[], Any]] = None) -> None:
        self.directory = Path(directory)
        self.fallback = fallback

    def __call__(self, driver: Any) -> Optional[str]:
        return self.capture(driver)

    def capture(self, driver: Any) -> Optional[str]:
        if driver is None:
            return None
        try:
            return self._save(driver)
        except InvalidSessionIdException as exc:
            replacement = self.fallback() if self.fallback else None
            if replacement is None or replacement is driver:
                logger.error("Screenshot failed, driver session is gone: %s", exc)
                return None
            logger.warning("Driver session is gone, retrying screenshot with the registered driver")
            try:
                return self._save(replacement)
            except Exception as retry_exc:
                logger.error("Screenshot retry failed: %s", retry_exc)
                return None
        except Exception as exc:
            logger.error("Screenshot failed: %s", exc)
            return None

    def _save(self, driver: Any) -> Optional[str]:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{unique_timestamp()}.png"
        if hasattr(driver, "save_screenshot"):
            if driver.save_screenshot(str(path)) is False:
                logger.error("Driver could not write screenshot to %s", path)
                return None
        elif hasattr(driver, "screenshot"):
            driver.screenshot(path=str(path))
        else:
            logger.error("%s cannot take screenshots", type(driver).__name__)
            return None
        logger.info("Saved screenshot %s", path)
        return str(path)


__all__ = ["ScreenshotTaker", "unique_timestamp"]
