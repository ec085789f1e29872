"""
Key/Value Store
---------------

A mutable mapping from string keys to values of any type, owned by
one scope (see :mod:`qa_core.store.registry`).  Values are not checked
at the store boundary; callers read back what they wrote.

Example::

    store.put("NAME", "Nir")
    store.get("NAME")   # "Nir"
    store.get("AGE")    # None
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List


class KeyValueStore:
    """Unordered string-keyed storage for one scope."""

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}
        # Held only by callers; put/get never take it.
        self.lock = threading.RLock()

    def put(self, key: str, value: Any) -> None:
        """Insert ``value`` under ``key``, replacing any previous value."""
        self._values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` or ``default`` if never set."""
        return self._values.get(key, default)

    def remove(self, key: str) -> None:
        """Delete ``key``; removing an absent key is a no-op."""
        self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()

    def keys(self) -> List[str]:
        return list(self._values)

    def snapshot(self) -> Dict[str, Any]:
        """Return a shallow copy of the current contents."""
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(keys={sorted(self._values)!r})"


__all__ = ["KeyValueStore"]
