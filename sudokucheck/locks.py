"""Spin locks guarding the shared task counter."""

from __future__ import annotations

import threading
import time
from enum import Enum
from typing import Callable, Optional, Union

Cancelled = Optional[Callable[[], bool]]


class LockKind(Enum):
    """The lock algorithms that can guard the critical section."""

    TAS = "tas"
    CAS = "cas"
    BOUNDED_CAS = "bounded-cas"


class _Atomic:
    """A value whose reads, writes and compare-and-swap are indivisible."""

    def __init__(self, value) -> None:
        self._value = value
        self._guard = threading.Lock()

    def load(self):
        with self._guard:
            return self._value

    def store(self, value) -> None:
        with self._guard:
            self._value = value

    def compare_and_swap(self, expected, new) -> bool:
        with self._guard:
            if self._value == expected:
                self._value = new
                return True
            return False

    def test_and_set(self) -> bool:
        """Set the value to True and return what it was before."""
        with self._guard:
            previous = bool(self._value)
            self._value = True
            return previous


def _spin() -> None:
    time.sleep(0)


class TestAndSetLock:
    """Spin lock built on an atomic test-and-set flag.

    Spinning does not watch for cancellation; the caller checks after
    acquiring and releases if it must stop.
    """

    __test__ = False

    def __init__(self) -> None:
        self._flag = _Atomic(False)

    @property
    def locked(self) -> bool:
        return bool(self._flag.load())

    def acquire(self, thread_id: int, cancelled: Cancelled = None) -> bool:
        """Spin until the flag was clear; always returns True."""
        while self._flag.test_and_set():
            _spin()
        return True

    def release(self, thread_id: int) -> None:
        self._flag.store(False)


class CompareAndSwapLock:
    """Spin lock that swaps a boolean from False to True to enter.

    Like the test-and-set lock, it spins regardless of cancellation.
    """

    def __init__(self) -> None:
        self._held = _Atomic(False)

    @property
    def locked(self) -> bool:
        return bool(self._held.load())

    def acquire(self, thread_id: int, cancelled: Cancelled = None) -> bool:
        """Spin until the swap succeeds; always returns True."""
        while not self._held.compare_and_swap(False, True):
            _spin()
        return True

    def release(self, thread_id: int) -> None:
        self._held.store(False)


class BoundedCompareAndSwapLock:
    """Compare-and-swap lock with bounded waiting.

    A releasing thread hands the lock to the next waiting thread in cyclic
    order after itself, so no waiter is passed over more than once.
    """

    def __init__(self, threads: int) -> None:
        if threads < 1:
            raise ValueError(f"a bounded lock needs at least one thread, got {threads}")
        self._threads = threads
        self._current = _Atomic(-1)
        self._waiting = [_Atomic(False) for _ in range(threads)]

    @property
    def holder(self) -> int:
        """Id of the thread allowed in, or -1 when the lock is free."""
        return self._current.load()

    def _check_id(self, thread_id: int) -> None:
        if not 0 <= thread_id < self._threads:
            raise ValueError(f"thread id {thread_id} is outside 0..{self._threads - 1}")

    def acquire(self, thread_id: int, cancelled: Cancelled = None) -> bool:
        """Wait for the lock; False if ``cancelled`` became true before it arrived.

        A thread that gives up stays marked as waiting.
        """
        self._check_id(thread_id)
        self._waiting[thread_id].store(True)
        if self._current.compare_and_swap(-1, thread_id):
            return True
        while self._current.load() != thread_id:
            if cancelled is not None and cancelled():
                return False
            _spin()
        return True

    def release(self, thread_id: int) -> None:
        """Pass the lock to the next waiting thread, or free it."""
        self._check_id(thread_id)
        self._waiting[thread_id].store(False)
        for offset in range(1, self._threads + 1):
            candidate = (thread_id + offset) % self._threads
            if self._waiting[candidate].load():
                self._current.store(candidate)
                return
        self._current.store(-1)


SpinLock = Union[TestAndSetLock, CompareAndSwapLock, BoundedCompareAndSwapLock]


def make_lock(kind: Union[LockKind, str], threads: int) -> SpinLock:
    """Build the lock named by ``kind`` for ``threads`` threads."""
    kind = LockKind(kind)
    if kind is LockKind.TAS:
        return TestAndSetLock()
    if kind is LockKind.CAS:
        return CompareAndSwapLock()
    return BoundedCompareAndSwapLock(threads)