"""
Concurrent Test Executor
------------------------

This module defines a simple thread-pool based executor for running
test units in parallel against one :class:`AutomationHarness`.  Each
submitted unit runs inside its own execution context, bracketed by
``begin_unit``/``end_unit``, so pooled threads that run many units in
turn never hand one unit's thread-local store or driver to the next.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional

from .context import execution_context
from .harness import AutomationHarness
from .utils.logger import get_logger


class ParallelExecutor:
    """Manage a thread pool for parallel unit execution."""

    def __init__(self, harness: AutomationHarness, max_workers: Optional[int] = None) -> None:
        self.harness = harness
        if max_workers is None:
            max_workers = harness.config.get_int("executor.max_workers", 4)
        self.max_workers = max_workers
        self.logger = get_logger(self.__class__.__name__)
        self._executor: Optional[ThreadPoolExecutor] = None

    def __enter__(self) -> "ParallelExecutor":
        self._ensure_pool()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _ensure_pool(self) -> ThreadPoolExecutor:
        if not self._executor:
            self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="qa-unit")
        return self._executor

    def _run_unit(self, name: str, fn: Callable, args: tuple, kwargs: dict) -> Any:
        with execution_context():
            with self.harness.unit(name):
                return fn(*args, **kwargs)

    def submit(self, name: str, fn: Callable, *args, **kwargs) -> Future:
        """Run ``fn`` as unit ``name`` on the pool."""
        return self._ensure_pool().submit(self._run_unit, name, fn, args, kwargs)

    def map(self, func: Callable, iterable: Iterable) -> List[Any]:
        """Run ``func`` once per item; failed units yield ``None``."""
        name = getattr(func, "__name__", "unit")
        futures = [self.submit(f"{name}[{idx}]", func, item) for idx, item in enumerate(iterable)]
        results = []
        for f in futures:
            try:
                results.append(f.result())
            except Exception as exc:
                self.logger.error("Unit execution failed: %s", exc)
                results.append(None)
        return results

    def shutdown(self) -> None:
        if self._executor:
            self._executor.shutdown(wait=True)
            self._executor = None


__all__ = ["ParallelExecutor"]
