"""Tests for clipdeck.services.dispatcher module."""

import threading

import pytest

from clipdeck.services.dispatcher import TaskDispatcher


@pytest.fixture
def dispatcher():
    d = TaskDispatcher()
    yield d
    d.shutdown(wait=True)


class TestTaskDispatcher:
    def test_submit_returns_future_with_result(self, dispatcher):
        future = dispatcher.submit(lambda a, b: a + b, 2, 3)
        assert future.result(timeout=5) == 5

    def test_runs_off_the_calling_thread(self, dispatcher):
        future = dispatcher.submit(threading.get_ident)
        assert future.result(timeout=5) != threading.get_ident()

    def test_tasks_run_in_submission_order(self, dispatcher):
        order = []
        futures = [dispatcher.submit(order.append, n) for n in range(20)]
        futures[-1].result(timeout=5)
        assert order == list(range(20))

    def test_failing_task_is_logged_not_raised(self, dispatcher):
        def broken():
            raise ValueError("boom")

        assert dispatcher.submit(broken).result(timeout=5) is None
        assert dispatcher.submit(lambda: "still alive").result(timeout=5) == "still alive"

    def test_submit_after_shutdown_is_dropped(self):
        d = TaskDispatcher()
        d.shutdown()
        calls = []
        future = d.submit(calls.append, 1)
        assert future.result(timeout=5) is None
        assert calls == []

    def test_shutdown_waits_for_queued_tasks(self, history):
        d = TaskDispatcher()
        for n in range(5):
            d.submit(history.add, f"item {n}")
        d.shutdown(wait=True)
        assert len(history) == 5
