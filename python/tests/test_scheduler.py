"""Task queue tests, driven by a hand-advanced clock."""

from __future__ import annotations

from backend.engine.scheduler import TaskQueue


def test_task_runs_only_once_due(clock) -> None:
    queue = TaskQueue(clock)
    ran: list[str] = []
    queue.call_later(500, lambda: ran.append("a"))

    clock.advance(499)
    assert queue.run_pending() == 0
    assert ran == []

    clock.advance(1)
    assert queue.run_pending() == 1
    assert ran == ["a"]

    clock.advance(1000)
    assert queue.run_pending() == 0
    assert ran == ["a"]


def test_tasks_run_in_due_order(clock) -> None:
    queue = TaskQueue(clock)
    ran: list[str] = []
    queue.call_later(300, lambda: ran.append("late"))
    queue.call_later(100, lambda: ran.append("early"))
    queue.call_later(100, lambda: ran.append("early-2"))

    clock.advance(1000)
    assert queue.run_pending() == 3
    assert ran == ["early", "early-2", "late"]


def test_cancelled_task_never_runs(clock) -> None:
    queue = TaskQueue(clock)
    ran: list[str] = []
    task = queue.call_later(100, lambda: ran.append("x"))
    task.cancel()

    assert not task.active
    assert queue.pending == 0
    clock.advance(500)
    assert queue.run_pending() == 0
    assert ran == []


def test_pending_and_next_due(clock) -> None:
    queue = TaskQueue(clock)
    assert queue.next_due is None

    first = queue.call_later(200, lambda: None)
    queue.call_later(700, lambda: None)
    assert queue.pending == 2
    assert queue.next_due == 0.2

    first.cancel()
    assert queue.pending == 1
    assert queue.next_due == 0.7

    clock.advance(700)
    queue.run_pending()
    assert queue.pending == 0
    assert queue.next_due is None
