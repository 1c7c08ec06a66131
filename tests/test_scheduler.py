import threading

from engine import ManualScheduler, ThreadingScheduler


def test_manual_scheduler_runs_nothing_until_advanced():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(1.0, lambda: calls.append("a"))

    assert scheduler.pending == 1
    assert scheduler.advance(0.5) == 0
    assert calls == []

    assert scheduler.advance(0.5) == 1
    assert calls == ["a"]
    assert scheduler.pending == 0
    assert scheduler.now == 1.0


def test_manual_scheduler_runs_in_due_order():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(2.0, lambda: calls.append("late"))
    scheduler.call_later(1.0, lambda: calls.append("early"))
    scheduler.call_later(1.0, lambda: calls.append("early-2"))

    assert scheduler.run_all() == 3
    assert calls == ["early", "early-2", "late"]


def test_cancelled_handle_never_runs():
    scheduler = ManualScheduler()
    calls = []
    handle = scheduler.call_later(1.0, lambda: calls.append("x"))

    handle.cancel()
    handle.cancel()

    assert handle.cancelled
    assert not handle.active
    assert scheduler.pending == 0
    assert scheduler.run_all() == 0
    assert calls == []


def test_handle_runs_at_most_once():
    scheduler = ManualScheduler()
    calls = []
    handle = scheduler.call_later(0.0, lambda: calls.append("x"))

    scheduler.advance(0)
    handle.run()
    handle.cancel()

    assert calls == ["x"]
    assert handle.done
    assert not handle.cancelled


def test_callbacks_scheduled_while_advancing_run_if_due():
    scheduler = ManualScheduler()
    calls = []

    def first():
        calls.append("first")
        scheduler.call_later(0.5, lambda: calls.append("second"))

    scheduler.call_later(0.5, first)
    scheduler.advance(1.0)
    assert calls == ["first", "second"]


def test_next_due_skips_cancelled():
    scheduler = ManualScheduler()
    cancelled = scheduler.call_later(1.0, lambda: None)
    scheduler.call_later(3.0, lambda: None)
    cancelled.cancel()
    assert scheduler.next_due() == 3.0


def test_threading_scheduler_fires():
    fired = threading.Event()
    handle = ThreadingScheduler().call_later(0.01, fired.set)
    assert fired.wait(timeout=2.0)
    assert handle.done


def test_threading_scheduler_cancel():
    fired = threading.Event()
    handle = ThreadingScheduler().call_later(0.2, fired.set)
    handle.cancel()
    assert not fired.wait(timeout=0.4)
    assert handle.cancelled
