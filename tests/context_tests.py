"""
Execution Context Tests
-----------------------
"""

import asyncio
import threading

from qa_core.context import current_context, execution_context, resolve_context
from qa_core.store import Scope, StoreRegistry


def test_defaults_to_thread_ident() -> None:
    assert current_context() == threading.get_ident()


def test_binding_nests_and_restores() -> None:
    outer_default = current_context()
    with execution_context("outer") as outer:
        assert outer == "outer"
        assert current_context() == "outer"
        with execution_context() as inner:
            assert inner != "outer"
            assert current_context() == inner
        assert current_context() == "outer"
    assert current_context() == outer_default


def test_explicit_context_wins() -> None:
    with execution_context("bound"):
        assert resolve_context("explicit") == "explicit"
        assert resolve_context(None) == "bound"


def test_binding_is_invisible_to_other_threads() -> None:
    seen = []
    with execution_context("main-only"):
        t = threading.Thread(target=lambda: seen.append(current_context()))
        t.start()
        t.join()
    assert seen[0] != "main-only"


def test_asyncio_tasks_get_isolated_stores() -> None:
    registry = StoreRegistry()

    async def unit(name: str) -> str:
        with execution_context(name):
            registry.get_store(Scope.THREAD_LOCAL).put("NAME", name)
            await asyncio.sleep(0)
            return registry.get_store(Scope.THREAD_LOCAL).get("NAME")

    async def main():
        return await asyncio.gather(unit("first"), unit("second"))

    assert asyncio.run(main()) == ["first", "second"]
    assert sorted(registry.contexts(Scope.THREAD_LOCAL)) == ["first", "second"]
