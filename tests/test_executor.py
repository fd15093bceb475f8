from __future__ import annotations

import threading

import pytest

from employee_api.core.executor import BoundedExecutor, TaskRejectedError


def _blocking_pool(policy: str):
    """Pool with room for exactly one in-flight task, plus the gate holding it."""
    executor = BoundedExecutor(1, 1, 0, rejection_policy=policy, thread_name_prefix="Test-")
    gate = threading.Event()
    started = threading.Event()

    def hold():
        started.set()
        gate.wait(timeout=5)
        return "held"

    first = executor.submit(hold)
    assert started.wait(timeout=5)
    return executor, gate, first


def test_submit_runs_on_worker_thread():
    with BoundedExecutor(2, 2, 5, thread_name_prefix="Async-") as executor:
        name = executor.submit(lambda: threading.current_thread().name).result(timeout=5)
    assert name.startswith("Async-")
    assert executor.capacity == 7


def test_abort_policy_rejects_when_saturated():
    executor, gate, first = _blocking_pool("abort")
    try:
        with pytest.raises(TaskRejectedError):
            executor.submit(lambda: "late")
    finally:
        gate.set()
        assert first.result(timeout=5) == "held"
        executor.shutdown()


def test_slot_is_released_after_completion():
    executor, gate, first = _blocking_pool("abort")
    gate.set()
    first.result(timeout=5)
    try:
        assert executor.submit(lambda: 42).result(timeout=5) == 42
    finally:
        executor.shutdown()


def test_caller_runs_policy_executes_in_submitting_thread():
    executor, gate, first = _blocking_pool("caller_runs")
    try:
        future = executor.submit(lambda: threading.current_thread().name)
        assert future.done()
        assert future.result() == threading.current_thread().name

        failing = executor.submit(lambda: 1 / 0)
        with pytest.raises(ZeroDivisionError):
            failing.result()
    finally:
        gate.set()
        first.result(timeout=5)
        executor.shutdown()


def test_block_policy_waits_for_capacity():
    executor, gate, first = _blocking_pool("block")
    results = []

    def submit_late():
        results.append(executor.submit(lambda: "late").result(timeout=5))

    submitter = threading.Thread(target=submit_late)
    submitter.start()
    submitter.join(timeout=0.2)
    assert submitter.is_alive()

    gate.set()
    submitter.join(timeout=5)
    executor.shutdown()
    assert results == ["late"]
    assert first.result() == "held"


@pytest.mark.parametrize(
    "args, kwargs",
    [
        ((0, 1, 0), {}),
        ((2, 1, 0), {}),
        ((1, 1, -1), {}),
        ((1, 1, 0), {"rejection_policy": "discard"}),
    ],
)
def test_invalid_configuration_is_rejected(args, kwargs):
    with pytest.raises(ValueError):
        BoundedExecutor(*args, **kwargs)
