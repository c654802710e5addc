import threading
import time

from mavplan.semaphore import Semaphore


def test_wait_times_out_without_notify():
    assert Semaphore().wait_for(0.05) is False


def test_notify_then_wait():
    sem = Semaphore()
    sem.notify()
    assert sem.wait_for(0.1) is True
    assert sem.wait_for(0.02) is False


def test_initial_count_is_consumed():
    sem = Semaphore(2)
    results = [sem.wait_for(0.02) for _ in range(3)]
    assert results == [True, True, False]


def test_notify_from_other_thread_wakes_waiter():
    sem = Semaphore()
    timer = threading.Timer(0.05, sem.notify)
    timer.start()
    try:
        assert sem.wait_for(2.0) is True
    finally:
        timer.join()


def test_shutdown_releases_waiter_quickly():
    sem = Semaphore()
    timer = threading.Timer(0.05, sem.shutdown)
    timer.start()
    began = time.monotonic()
    try:
        assert sem.wait_for(5.0) is False
    finally:
        timer.join()
    assert time.monotonic() - began < 2.0


def test_count_still_granted_after_shutdown():
    sem = Semaphore(1)
    sem.shutdown()
    assert sem.wait_for(0.01) is True
    assert sem.wait_for(0.01) is False