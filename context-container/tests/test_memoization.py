"""Tests for ContextContainer.memoize with synchronous computations."""

from __future__ import annotations

import threading
import time

import pytest
from contextcontainer import CC, ContainerFactory


class Counter:
    @classmethod
    def return_argument(cls, cc: CC, key: str, arg: int) -> int:
        return cc.memoize(cls, key, lambda: arg)


class Counter2:
    @classmethod
    def return_argument(cls, cc: CC, key: str, arg: int) -> int:
        return cc.memoize(cls, key, lambda: arg)


class TestMemoization:
    """Caching semantics within one container."""

    def test_returns_a_value(self):
        cc = ContainerFactory.create([])

        assert Counter.return_argument(cc, "key", 1) == 1

    def test_returns_the_same_value_for_the_same_key(self):
        cc = ContainerFactory.create([])

        assert Counter.return_argument(cc, "key", 1) == 1
        assert Counter.return_argument(cc, "key", 2) == 1

    def test_returns_different_values_for_different_keys(self):
        cc = ContainerFactory.create([])

        assert Counter.return_argument(cc, "key1", 1) == 1
        assert Counter.return_argument(cc, "key2", 2) == 2

    def test_returns_different_values_for_different_scopes(self):
        cc = ContainerFactory.create([])

        assert Counter.return_argument(cc, "key", 1) == 1
        assert Counter2.return_argument(cc, "key", 2) == 2

    def test_returns_different_values_for_different_containers(self):
        cc1 = ContainerFactory.create([])
        cc2 = ContainerFactory.create([])

        assert Counter.return_argument(cc1, "key", 1) == 1
        assert Counter.return_argument(cc2, "key", 2) == 2

    def test_second_function_is_never_called(self):
        cc = ContainerFactory.create()
        calls: list[str] = []

        def first() -> str:
            calls.append("first")
            return "first"

        def second() -> str:
            calls.append("second")
            return "second"

        assert cc.memoize(Counter, "key", first) == "first"
        assert cc.memoize(Counter, "key", second) == "first"
        assert calls == ["first"]

    def test_value_is_returned_by_identity(self):
        cc = ContainerFactory.create()
        value = object()

        assert cc.memoize(Counter, "key", lambda: value) is value
        assert cc.memoize(Counter, "key", object) is value

    def test_none_is_cached(self):
        cc = ContainerFactory.create()
        calls: list[int] = []

        def compute() -> None:
            calls.append(1)

        assert cc.memoize(Counter, "key", compute) is None
        assert cc.memoize(Counter, "key", compute) is None
        assert calls == [1]

    def test_scopes_are_compared_by_identity(self):
        cc = ContainerFactory.create()
        scope_a: list[int] = []
        scope_b: list[int] = []  # equal to scope_a, but a different object

        assert cc.memoize(scope_a, "key", lambda: "a") == "a"
        assert cc.memoize(scope_b, "key", lambda: "b") == "b"

    def test_instances_can_be_scopes(self):
        cc = ContainerFactory.create()
        first, second = Counter(), Counter()

        assert cc.memoize(first, "key", lambda: 1) == 1
        assert cc.memoize(second, "key", lambda: 2) == 2
        assert cc.memoize(first, "key", lambda: 3) == 1

    def test_key_must_be_a_string(self):
        cc = ContainerFactory.create()

        with pytest.raises(TypeError):
            cc.memoize(Counter, 1, lambda: 1)  # type: ignore[arg-type]


class TestMemoizationFailures:
    """Synchronous failures are propagated and never cached."""

    def test_exception_propagates_unchanged(self):
        cc = ContainerFactory.create()
        error = ValueError("boom")

        def fail() -> int:
            raise error

        with pytest.raises(ValueError) as exc_info:
            cc.memoize(Counter, "key", fail)

        assert exc_info.value is error

    def test_failed_call_is_retried(self):
        cc = ContainerFactory.create()

        def fail() -> int:
            raise ValueError("boom")

        with pytest.raises(ValueError):
            cc.memoize(Counter, "key", fail)

        assert cc.memoize(Counter, "key", lambda: 5) == 5
        assert cc.memoize(Counter, "key", lambda: 6) == 5

    def test_reentrant_call_for_same_key_fails(self):
        cc = ContainerFactory.create()

        def recurse() -> int:
            return cc.memoize(Counter, "key", recurse)

        with pytest.raises(RecursionError):
            cc.memoize(Counter, "key", recurse)

        # The failed claim is released
        assert cc.memoize(Counter, "key", lambda: 1) == 1

    def test_nested_call_for_other_key_is_allowed(self):
        cc = ContainerFactory.create()

        def outer() -> int:
            return cc.memoize(Counter, "inner", lambda: 20) + 1

        assert cc.memoize(Counter, "outer", outer) == 21
        assert cc.memoize(Counter, "inner", lambda: 0) == 20


class TestMemoizationThreads:
    """Threads sharing a container compute each key once."""

    def test_concurrent_threads_call_function_once(self):
        cc = ContainerFactory.create()
        calls: list[int] = []
        results: list[object] = []
        started = threading.Event()
        release = threading.Event()

        def slow() -> object:
            calls.append(1)
            started.set()
            release.wait(5)
            return object()

        def worker() -> None:
            results.append(cc.memoize(Counter, "key", slow))

        first = threading.Thread(target=worker)
        first.start()
        assert started.wait(5)

        second = threading.Thread(target=worker)
        second.start()
        time.sleep(0.05)
        release.set()

        first.join(5)
        second.join(5)

        assert len(calls) == 1
        assert len(results) == 2
        assert results[0] is results[1]

    def test_waiting_thread_retries_after_failure(self):
        cc = ContainerFactory.create()
        started = threading.Event()
        release = threading.Event()
        outcomes: dict[str, object] = {}

        def failing() -> str:
            started.set()
            release.wait(5)
            raise ValueError("boom")

        def owner() -> None:
            try:
                cc.memoize(Counter, "key", failing)
            except ValueError as e:
                outcomes["owner"] = e

        def waiter() -> None:
            outcomes["waiter"] = cc.memoize(Counter, "key", lambda: "retried")

        first = threading.Thread(target=owner)
        first.start()
        assert started.wait(5)

        second = threading.Thread(target=waiter)
        second.start()
        time.sleep(0.05)
        release.set()

        first.join(5)
        second.join(5)

        assert isinstance(outcomes["owner"], ValueError)
        assert outcomes["waiter"] == "retried"
