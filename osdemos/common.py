"""Timing helpers and a semaphore built from a lock and a condition variable."""

import threading
import time


def get_time():
    """Return the current wall-clock time in seconds."""
    return time.time()


def spin(howlong):
    """Busy-wait for ``howlong`` seconds without yielding the CPU on purpose."""
    start = get_time()
    while get_time() - start < howlong:
        pass


class Zemaphore:
    """A counting semaphore made from one lock and one condition variable."""

    def __init__(self, value):
        self.value = value
        self._cond = threading.Condition(threading.Lock())

    def wait(self):
        """Block until the value is positive, then decrement it."""
        with self._cond:
            while self.value <= 0:
                self._cond.wait()
            self.value -= 1

    def post(self):
        """Increment the value and wake one waiter."""
        with self._cond:
            self.value += 1
            self._cond.notify()