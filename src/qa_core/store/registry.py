"""
Store Registry
--------------

Maps a scope identity to its :class:`KeyValueStore`.  ``GLOBAL`` scope
resolves to one store shared by every execution context;
``THREAD_LOCAL`` scope resolves to one store per execution context
(see :mod:`qa_core.context`).

Stores are created lazily on first access.  Lookups of an existing
store take no lock; creation is guarded by the registry lock and
re-checked under it, so concurrent first access for the same key
always yields a single instance.  The registry only makes *creation*
atomic: callers sharing the GLOBAL store guard their own multi-step
updates, for example with ``store.lock``.

Example::

    registry = StoreRegistry()
    registry.get_store(Scope.GLOBAL).put("NIR", "Nir")
    registry.get_store(Scope.GLOBAL).get("NIR")   # "Nir"
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Callable, Dict, Hashable, List, Optional, Tuple

from ..context import resolve_context
from ..utils.logger import get_logger
from .key_value_store import KeyValueStore


class Scope(str, Enum):
    GLOBAL = "global"
    THREAD_LOCAL = "thread_local"

    @classmethod
    def _missing_(cls, value):
        # Accept member names as well, e.g. "GLOBAL".
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None


# Key shared by everyone under GLOBAL scope.
GLOBAL_KEY = 0

StoreKey = Tuple[Scope, Hashable]


class StoreRegistry:
    """Lazily create and hand out one store per (scope, context) pair."""

    def __init__(self, store_factory: Callable[[], KeyValueStore] = KeyValueStore) -> None:
        self.logger = get_logger(self.__class__.__name__)
        self._store_factory = store_factory
        self._stores: Dict[StoreKey, KeyValueStore] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(scope: Scope, context: Optional[Hashable]) -> StoreKey:
        if scope is Scope.GLOBAL:
            return (scope, GLOBAL_KEY)
        return (scope, resolve_context(context))

    def get_store(self, scope: Scope = Scope.THREAD_LOCAL, context: Optional[Hashable] = None) -> KeyValueStore:
        """Return the store for ``scope``, creating it on first access.

        :param scope: ``Scope.GLOBAL`` or ``Scope.THREAD_LOCAL``.
        :param context: explicit execution-context key; defaults to the
            caller's current context.  Ignored for ``GLOBAL``.
        """
        scope = Scope(scope)
        key = self._key(scope, context)
        if scope is Scope.GLOBAL:
            self.logger.debug("Get global store")
        store = self._stores.get(key)
        if store is not None:
            return store
        with self._lock:
            store = self._stores.get(key)
            if store is None:
                store = self._store_factory()
                self._stores[key] = store
                self.logger.debug("Created %s store for context %s", scope.value, key[1])
        return store

    def remove_store(self, scope: Scope = Scope.THREAD_LOCAL, context: Optional[Hashable] = None) -> None:
        """Discard the store for ``scope``; does nothing if none exists."""
        scope = Scope(scope)
        key = self._key(scope, context)
        with self._lock:
            removed = self._stores.pop(key, None)
        if removed is not None:
            self.logger.debug("Removed %s store of context %s", scope.value, key[1])

    def contexts(self, scope: Scope = Scope.THREAD_LOCAL) -> List[Hashable]:
        """Return the context keys that currently own a store in ``scope``."""
        scope = Scope(scope)
        with self._lock:
            return [ctx for (store_scope, ctx) in self._stores if store_scope is scope]

    def __len__(self) -> int:
        return len(self._stores)


__all__ = ["Scope", "GLOBAL_KEY", "StoreRegistry"]
