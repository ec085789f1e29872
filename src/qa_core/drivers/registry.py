"""
Driver Registry
---------------

Holds the active browser/automation driver of every execution context,
so code deep inside a test (screenshot capture on a failed soft
assertion, for instance) can reach "the driver of this test" without
it being passed around.  At most one driver is registered per context;
registering again replaces the previous handle.

"No driver" is a valid state: non-UI tests never register one and
:meth:`DriverRegistry.current` simply returns ``None`` for them.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Hashable, Optional

from ..context import resolve_context
from ..utils.logger import get_logger


class DriverRegistry:
    """Map execution contexts to their driver handles."""

    def __init__(self) -> None:
        self.logger = get_logger(self.__class__.__name__)
        self._drivers: Dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    def register(self, driver: Any, context: Optional[Hashable] = None) -> None:
        """Associate ``driver`` with the calling (or given) context."""
        key = resolve_context(context)
        with self._lock:
            previous = self._drivers.get(key)
            self._drivers[key] = driver
        if previous is not None and previous is not driver:
            self.logger.debug("Replaced driver of context %s", key)

    def current(self, context: Optional[Hashable] = None) -> Optional[Any]:
        """Return the driver of the calling (or given) context, or ``None``."""
        return self._drivers.get(resolve_context(context))

    def unregister(self, context: Optional[Hashable] = None) -> Optional[Any]:
        """Clear the context's driver and return it; a no-op if none is set."""
        key = resolve_context(context)
        with self._lock:
            return self._drivers.pop(key, None)

    def active(self) -> Dict[Hashable, Any]:
        """Snapshot of every registered context and its driver."""
        with self._lock:
            return dict(self._drivers)

    def __len__(self) -> int:
        return len(self._drivers)


__all__ = ["DriverRegistry"]
