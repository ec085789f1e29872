"""
Scoped key/value storage.

``StoreRegistry`` hands out one ``KeyValueStore`` per scope identity:
a single shared store under ``Scope.GLOBAL`` and one store per
execution context under ``Scope.THREAD_LOCAL``.
"""

from .key_value_store import KeyValueStore
from .registry import GLOBAL_KEY, Scope, StoreRegistry

__all__ = ["KeyValueStore", "Scope", "StoreRegistry", "GLOBAL_KEY"]
