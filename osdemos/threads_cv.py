"""Condition variables: joining on a child thread and a bounded producer/consumer buffer."""

import re
import sys
import threading
import time

_ATOI = re.compile(r"\s*([+-]?\d+)")
END_OF_PRODUCTION = -1


def _atoi(text):
    match = _ATOI.match(text)
    value = int(match.group(1)) if match else 0
    return (value + 2**31) % 2**32 - 2**31


def _say(text):
    print(text, flush=True)


class _PthreadCond:
    """A condition variable whose signal needs no lock and is lost without a waiter."""

    def __init__(self):
        self._guard = threading.Lock()
        self._waiters = []

    def wait(self, mutex):
        waiter = threading.Lock()
        waiter.acquire()
        with self._guard:
            self._waiters.append(waiter)
        mutex.release()
        waiter.acquire()
        mutex.acquire()

    def signal(self):
        with self._guard:
            if self._waiters:
                self._waiters.pop(0).release()


class Synchronizer:
    """A one-shot signal that resets itself after each wait."""

    def __init__(self):
        self._done = False
        self._cond = threading.Condition(threading.Lock())

    def signal(self):
        """Mark the event done and wake one waiter."""
        with self._cond:
            self._done = True
            self._cond.notify()

    def wait(self):
        """Block until signalled, then reset for the next use."""
        with self._cond:
            while not self._done:
                self._cond.wait()
            self._done = False


class BoundedBuffer:
    """A fixed-size ring buffer guarded by one lock and one or two condition variables."""

    def __init__(self, size, single_cv=False):
        if size <= 0:
            raise ValueError(f"buffer size must be positive, got {size}")
        self._slots = [0] * size
        self._max = size
        self._use_ptr = 0
        self._fill_ptr = 0
        self._num_full = 0
        lock = threading.Lock()
        if single_cv:
            self._empty = self._fill = threading.Condition(lock)
        else:
            self._empty = threading.Condition(lock)
            self._fill = threading.Condition(lock)

    def __len__(self):
        return self._num_full

    def put(self, value):
        """Store ``value``, waiting while the buffer is full."""
        with self._empty:
            while self._num_full == self._max:
                self._empty.wait()
            self._slots[self._fill_ptr] = value
            self._fill_ptr = (self._fill_ptr + 1) % self._max
            self._num_full += 1
            self._fill.notify()

    def get(self):
        """Remove and return the oldest value, waiting while the buffer is empty."""
        with self._fill:
            while self._num_full == 0:
                self._fill.wait()
            value = self._slots[self._use_ptr]
            self._use_ptr = (self._use_ptr + 1) % self._max
            self._num_full -= 1
            self._empty.notify()
            return value


def run_producer_consumer(buffer_size, loops, consumers, single_cv=False):
    """One producer feeds ``loops`` values to ``consumers`` consumers.

    Returns, per consumer, the values it received, without the end marker.
    """
    buffer = BoundedBuffer(buffer_size, single_cv)
    received = [[] for _ in range(consumers)]

    def producer():
        for value in range(loops):
            buffer.put(value)
        for _ in range(consumers):
            buffer.put(END_OF_PRODUCTION)

    def consumer(seen):
        while (value := buffer.get()) != END_OF_PRODUCTION:
            seen.append(value)

    threads = [threading.Thread(target=producer)]
    threads.extend(threading.Thread(target=consumer, args=(seen,)) for seen in received)
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return received


def join_main(argv=None):
    """The parent waits for the child with a lock, a condition and a state flag."""
    cond = threading.Condition(threading.Lock())
    done = False

    def child():
        nonlocal done
        _say("child")
        time.sleep(1)
        with cond:
            done = True
            cond.notify()

    _say("parent: begin")
    threading.Thread(target=child, daemon=True).start()
    with cond:
        while not done:
            cond.wait()
    _say("parent: end")
    return 0


def join_spin_main(argv=None):
    """The parent spins on a flag until the child sets it."""
    done = False

    def child():
        nonlocal done
        _say("child")
        time.sleep(5)
        done = True

    _say("parent: begin")
    threading.Thread(target=child, daemon=True).start()
    while not done:
        pass
    _say("parent: end")
    return 0


def join_no_lock_main(argv=None):
    """The child signals without the lock; the wakeup can be lost and the parent hangs."""
    mutex = threading.Lock()
    cond = _PthreadCond()
    done = False

    def child():
        nonlocal done
        _say("child: begin")
        time.sleep(1)
        done = True
        _say("child: signal")
        cond.signal()

    _say("parent: begin")
    threading.Thread(target=child, daemon=True).start()
    with mutex:
        _say("parent: check condition")
        while not done:
            time.sleep(2)
            _say("parent: wait to be signalled...")
            cond.wait(mutex)
    _say("parent: end")
    return 0


def join_no_state_var_main(argv=None):
    """Without a state flag, a signal sent before the wait is lost and the parent hangs."""
    cond = threading.Condition(threading.Lock())

    def child():
        _say("child: begin")
        with cond:
            _say("child: signal")
            cond.notify()

    _say("parent: begin")
    threading.Thread(target=child, daemon=True).start()
    time.sleep(2)
    _say("parent: wait to be signalled...")
    with cond:
        cond.wait()
    _say("parent: end")
    return 0


def join_modular_main(argv=None):
    """The parent waits for the child through a Synchronizer."""
    sync = Synchronizer()

    def child():
        _say("child")
        time.sleep(1)
        sync.signal()

    _say("parent: begin")
    threading.Thread(target=child, daemon=True).start()
    sync.wait()
    _say("parent: end")
    return 0


def _pc(argv, prog, single_cv):
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 3:
        print(f"usage: {prog} <buffersize> <loops> <consumers>", file=sys.stderr)
        return 1
    size, loops, consumers = (_atoi(arg) for arg in argv)
    try:
        run_producer_consumer(size, loops, consumers, single_cv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


def pc_main(argv=None):
    """Producer/consumer with separate empty and fill conditions."""
    return _pc(argv, "pc", False)


def pc_single_cv_main(argv=None):
    """Producer/consumer sharing one condition variable; can stall with many consumers."""
    return _pc(argv, "pc_single_cv", True)


if __name__ == "__main__":
    sys.exit(pc_main())