import threading

import pytest

from sudokucheck.locks import (
    BoundedCompareAndSwapLock,
    CompareAndSwapLock,
    LockKind,
    TestAndSetLock,
    make_lock,
)


def _always():
    return True


def _hammer(lock, threads=4, rounds=200):
    counter = {"value": 0, "inside": 0, "max_inside": 0}

    def work(thread_id):
        for _ in range(rounds):
            assert lock.acquire(thread_id, None)
            counter["inside"] += 1
            counter["max_inside"] = max(counter["max_inside"], counter["inside"])
            value = counter["value"]
            counter["value"] = value + 1
            counter["inside"] -= 1
            lock.release(thread_id)

    workers = [threading.Thread(target=work, args=(i,)) for i in range(threads)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join(timeout=30)
    return counter


@pytest.mark.parametrize("kind", list(LockKind))
def test_mutual_exclusion(kind):
    lock = make_lock(kind, 4)
    counter = _hammer(lock)
    assert counter["value"] == 4 * 200
    assert counter["max_inside"] == 1


@pytest.mark.parametrize("factory", [TestAndSetLock, CompareAndSwapLock])
def test_simple_lock_blocks_until_release(factory):
    lock = factory()
    assert lock.acquire(0, None)
    assert lock.locked
    entered = threading.Event()

    def other():
        lock.acquire(1, _always)
        entered.set()

    worker = threading.Thread(target=other)
    worker.start()
    assert not entered.wait(0.1)
    lock.release(0)
    assert entered.wait(5)
    worker.join(5)
    assert lock.locked
    lock.release(1)
    assert not lock.locked


def test_bounded_free_lock_is_taken_even_when_cancelled():
    lock = BoundedCompareAndSwapLock(2)
    assert lock.holder == -1
    assert lock.acquire(1, _always)
    assert lock.holder == 1


def test_bounded_gives_up_when_cancelled():
    lock = BoundedCompareAndSwapLock(2)
    assert lock.acquire(0, None)
    assert lock.acquire(1, _always) is False
    assert lock.holder == 0


def test_bounded_hands_off_in_cyclic_order():
    lock = BoundedCompareAndSwapLock(3)
    assert lock.acquire(0, None)
    assert lock.acquire(2, _always) is False
    assert lock.acquire(1, _always) is False
    lock.release(0)
    assert lock.holder == 1
    assert lock.acquire(2, _always) is False
    assert lock.acquire(1, _always)
    lock.release(1)
    assert lock.holder == 2
    assert lock.acquire(2, _always)
    lock.release(2)
    assert lock.holder == -1
    assert lock.acquire(0, _always)
    assert lock.holder == 0


def test_bounded_waiter_thread_receives_lock():
    lock = BoundedCompareAndSwapLock(2)
    assert lock.acquire(0, None)
    got = threading.Event()

    def waiter():
        if lock.acquire(1, None):
            got.set()

    worker = threading.Thread(target=waiter)
    worker.start()
    assert not got.wait(0.1)
    lock.release(0)
    assert got.wait(5)
    worker.join(5)
    assert lock.holder == 1


def test_bounded_rejects_bad_sizes_and_ids():
    with pytest.raises(ValueError):
        BoundedCompareAndSwapLock(0)
    lock = BoundedCompareAndSwapLock(2)
    with pytest.raises(ValueError):
        lock.acquire(2, None)
    with pytest.raises(ValueError):
        lock.release(-1)


def test_make_lock_by_name():
    lock = make_lock("bounded-cas", 3)
    assert isinstance(lock, BoundedCompareAndSwapLock)
    assert lock.acquire(2, None)
    assert lock.holder == 2
    tas = make_lock("tas", 1)
    assert isinstance(tas, TestAndSetLock)
    assert tas.acquire(0, None)
    assert tas.locked


def test_make_lock_unknown_kind():
    with pytest.raises(ValueError):
        make_lock("mutex", 2)


def test_make_lock_bounded_needs_threads():
    with pytest.raises(ValueError):
        make_lock(LockKind.BOUNDED_CAS, 0)