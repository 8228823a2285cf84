import time

import pytest

from ptkit.errors import ErrorCode, PtkError
from ptkit.thread import TIME_NO_WAIT, ConditionVariable, Mutex, Thread


def _lock_elsewhere(mutex, timeout_ms):
    result = []

    def attempt(_):
        try:
            mutex.lock(timeout_ms)
        except PtkError as exc:
            result.append(exc.code)
        else:
            result.append("locked")
            mutex.unlock()

    Thread(attempt).join()
    return result[0]


def test_thread_runs_function_with_data():
    seen = []
    thread = Thread(seen.append, 42)
    thread.join()
    assert seen == [42]
    assert thread.alive is False


def test_thread_requires_function():
    with pytest.raises(PtkError) as info:
        Thread(None)
    assert info.value.code is ErrorCode.NULL_PTR


def test_try_lock_held_elsewhere_would_block():
    mutex = Mutex()
    with mutex:
        assert _lock_elsewhere(mutex, TIME_NO_WAIT) is ErrorCode.WOULD_BLOCK
    assert _lock_elsewhere(mutex, TIME_NO_WAIT) == "locked"


def test_timed_lock_times_out():
    mutex = Mutex()
    with mutex:
        assert _lock_elsewhere(mutex, 30) is ErrorCode.TIMEOUT


def test_mutex_is_recursive():
    mutex = Mutex()
    mutex.lock()
    mutex.lock(TIME_NO_WAIT)
    mutex.unlock()
    assert _lock_elsewhere(mutex, TIME_NO_WAIT) is ErrorCode.WOULD_BLOCK
    mutex.unlock()
    assert _lock_elsewhere(mutex, TIME_NO_WAIT) == "locked"


def test_unlock_without_holding_fails():
    with pytest.raises(PtkError) as info:
        Mutex().unlock()
    assert info.value.code is ErrorCode.CONFIGURATION_ERROR


def test_wait_times_out_and_reacquires_mutex():
    mutex = Mutex()
    cond = ConditionVariable()
    with mutex:
        with pytest.raises(PtkError) as info:
            cond.wait(mutex, 20)
        assert info.value.code is ErrorCode.TIMEOUT
        assert _lock_elsewhere(mutex, TIME_NO_WAIT) is ErrorCode.WOULD_BLOCK


def test_signal_wakes_waiter():
    mutex = Mutex()
    cond = ConditionVariable()
    state = {"ready": False, "woken": False}

    def waiter(_):
        with mutex:
            while not state["ready"]:
                cond.wait(mutex, 5000)
            state["woken"] = True

    thread = Thread(waiter)
    time.sleep(0.05)
    with mutex:
        state["ready"] = True
        cond.signal()
    thread.join()
    assert (state["woken"], thread.alive) == (True, False)


def test_signal_without_waiters_is_harmless():
    mutex = Mutex()
    cond = ConditionVariable()
    cond.signal()
    with mutex:
        with pytest.raises(PtkError) as info:
            cond.wait(mutex, 10)
    assert info.value.code is ErrorCode.TIMEOUT