"""
Execution Context
-----------------

Every registry in this package partitions its state by the *execution
context* of the caller: the unit of concurrent work a test runs in.
By default that is the calling OS thread.  Code that multiplexes
several logical units over one thread (asyncio tasks, green threads,
a thread pool reused by many tests) binds an explicit key with
:func:`execution_context`; the binding lives in a
:class:`contextvars.ContextVar`, so it follows asyncio tasks and is
invisible to other threads.

Example::

    with execution_context("checkout-test"):
        harness.store().put("ORDER", order_id)
"""

from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Hashable, Iterator, Optional


_bound_context: ContextVar[Optional[Hashable]] = ContextVar("qa_core_execution_context", default=None)


def current_context() -> Hashable:
    """Return the key of the calling execution context.

    The bound key wins; otherwise the calling thread's identifier is
    used.
    """
    bound = _bound_context.get()
    if bound is not None:
        return bound
    return threading.get_ident()


def resolve_context(context: Optional[Hashable] = None) -> Hashable:
    """Return ``context`` when given, else :func:`current_context`."""
    return context if context is not None else current_context()


def new_context_key() -> str:
    return f"ctx-{uuid.uuid4().hex[:12]}"


@contextmanager
def execution_context(key: Optional[Hashable] = None) -> Iterator[Hashable]:
    """Bind ``key`` (or a fresh one) as the current execution context.

    Bindings nest; leaving the block restores the previous key.
    """
    if key is None:
        key = new_context_key()
    token = _bound_context.set(key)
    try:
        yield key
    finally:
        _bound_context.reset(token)


__all__ = ["current_context", "resolve_context", "new_context_key", "execution_context"]
