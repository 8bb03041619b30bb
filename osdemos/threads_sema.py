"""Semaphores at work: mutual exclusion, joining, dining philosophers, producers and readers."""

import re
import sys
import threading
import time

from osdemos.common import Zemaphore

_ATOI = re.compile(r"\s*([+-]?\d+)")

NUM_PHILOSOPHERS = 5
CMAX = 10
END_OF_PRODUCTION = -1
BINARY_LOOPS = 10_000_000


def _atoi(text):
    match = _ATOI.match(text)
    value = int(match.group(1)) if match else 0
    return (value + 2**31) % 2**32 - 2**31


def _say(text):
    print(text, flush=True)


def _args(argv):
    return sys.argv[1:] if argv is None else argv


def _usage(message):
    print(message, file=sys.stderr)
    return 1


class RWLock:
    """A reader-writer lock: many readers at once, or a single writer."""

    def __init__(self):
        self.readers = 0
        self._lock = threading.Semaphore(1)
        self._writelock = threading.Semaphore(1)

    def acquire_readlock(self):
        """Enter as a reader; the first reader shuts writers out."""
        with self._lock:
            self.readers += 1
            if self.readers == 1:
                self._writelock.acquire()

    def release_readlock(self):
        """Leave as a reader; the last reader lets writers in."""
        with self._lock:
            self.readers -= 1
            if self.readers == 0:
                self._writelock.release()

    def acquire_writelock(self):
        """Enter as the only writer."""
        self._writelock.acquire()

    def release_writelock(self):
        """Leave as the writer."""
        self._writelock.release()


def left(p):
    """The fork on philosopher ``p``'s left."""
    return p


def right(p):
    """The fork on philosopher ``p``'s right."""
    return (p + 1) % NUM_PHILOSOPHERS


def dine(num_loops, avoid_deadlock=True, verbose=False):
    """Five philosophers each eat ``num_loops`` times; return the meals each one had.

    Unless ``avoid_deadlock`` is set, all philosophers take their left fork
    first, and the table can deadlock.
    """
    forks = [threading.Semaphore(1) for _ in range(NUM_PHILOSOPHERS)]
    print_lock = threading.Semaphore(1)
    meals = [0] * NUM_PHILOSOPHERS

    def say(p, text):
        if verbose:
            with print_lock:
                print(" " * (p * 10) + text, flush=True)

    def try_message(p, fork):
        if not avoid_deadlock:
            return f"{p}: try {fork}"
        if p == NUM_PHILOSOPHERS - 1:
            return f"{p} try {fork}"
        return f"try {fork}"

    def get_forks(p):
        if avoid_deadlock and p == NUM_PHILOSOPHERS - 1:
            order = (right(p), left(p))
        else:
            order = (left(p), right(p))
        for fork in order:
            say(p, try_message(p, fork))
            forks[fork].acquire()

    def put_forks(p):
        forks[left(p)].release()
        forks[right(p)].release()

    def philosopher(p):
        say(p, f"{p}: start")
        for _ in range(num_loops):
            say(p, f"{p}: think")
            get_forks(p)
            say(p, f"{p}: eat")
            meals[p] += 1
            put_forks(p)
            say(p, f"{p}: done")

    threads = [
        threading.Thread(target=philosopher, args=(p,)) for p in range(NUM_PHILOSOPHERS)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return meals


def count_with_binary_semaphore(loops=BINARY_LOOPS):
    """Two threads each add 1 to a counter ``loops`` times under a binary semaphore."""
    mutex = threading.Semaphore(1)
    counter = 0

    def child():
        nonlocal counter
        for _ in range(loops):
            mutex.acquire()
            counter += 1
            mutex.release()

    threads = [threading.Thread(target=child) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return counter


def produce_consume(buffer_size, loops, consumers):
    """One producer hands ``loops`` values to ``consumers`` consumers through a ring buffer.

    Each consumer prints what it takes, the end marker included. Returns, per
    consumer, the values it received without the end marker.
    """
    if consumers > CMAX:
        raise ValueError(f"at most {CMAX} consumers, got {consumers}")
    if buffer_size <= 0:
        raise ValueError(f"buffer size must be positive, got {buffer_size}")
    slots = [0] * buffer_size
    empty = threading.Semaphore(buffer_size)
    full = threading.Semaphore(0)
    mutex = threading.Semaphore(1)
    fill_ptr = 0
    use_ptr = 0

    def put(value):
        nonlocal fill_ptr
        empty.acquire()
        with mutex:
            slots[fill_ptr] = value
            fill_ptr = (fill_ptr + 1) % buffer_size
        full.release()

    def get():
        nonlocal use_ptr
        full.acquire()
        with mutex:
            value = slots[use_ptr]
            use_ptr = (use_ptr + 1) % buffer_size
        empty.release()
        return value

    def producer():
        for value in range(loops):
            put(value)
        for _ in range(consumers):
            put(END_OF_PRODUCTION)

    received = [[] for _ in range(max(consumers, 0))]

    def consumer(cid):
        value = 0
        while value != END_OF_PRODUCTION:
            value = get()
            _say(f"{cid} {value}")
            if value != END_OF_PRODUCTION:
                received[cid].append(value)

    threads = [threading.Thread(target=producer)]
    threads.extend(threading.Thread(target=consumer, args=(cid,)) for cid in range(consumers))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return received


def read_write(read_loops, write_loops):
    """A reader and a writer share a counter under a reader-writer lock.

    Returns the values the reader saw and the final counter.
    """
    lock = RWLock()
    counter = 0
    reads = []

    def reader():
        local = 0
        for _ in range(read_loops):
            lock.acquire_readlock()
            local = counter
            lock.release_readlock()
            reads.append(local)
            _say(f"read {local}")
        _say(f"read done: {local}")

    def writer():
        nonlocal counter
        for _ in range(write_loops):
            lock.acquire_writelock()
            counter += 1
            lock.release_writelock()
        _say("write done")

    threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return reads, counter


def throttle(num_threads, sem_value, hold=1.0):
    """Start ``num_threads`` children, at most ``sem_value`` of them working at once.

    Each child holds its place for ``hold`` seconds. Returns the largest number
    of children seen working at the same time.
    """
    sem = threading.Semaphore(sem_value)
    guard = threading.Lock()
    active = 0
    peak = 0

    def child(index):
        nonlocal active, peak
        with sem:
            with guard:
                active += 1
                peak = max(peak, active)
            _say(f"child {index}")
            time.sleep(hold)
            with guard:
                active -= 1

    threads = [threading.Thread(target=child, args=(i,)) for i in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return peak


def binary_main(argv=None):
    """Two threads count to ten million each under a binary semaphore."""
    counter = count_with_binary_semaphore(BINARY_LOOPS)
    print(f"result: {counter} (should be {2 * BINARY_LOOPS})")
    return 0


def _dining(argv, usage, avoid_deadlock, verbose):
    argv = _args(argv)
    if len(argv) != 1:
        return _usage(usage)
    _say("dining: started")
    dine(_atoi(argv[0]), avoid_deadlock, verbose)
    _say("dining: finished")
    return 0


def dining_deadlock_main(argv=None):
    """Dining philosophers who all reach left first and may deadlock."""
    return _dining(argv, "usage: dining_philosophers_deadlock <num_loops>", False, False)


def dining_deadlock_print_main(argv=None):
    """The deadlocking table, printing every step."""
    return _dining(argv, "usage: dining_philosophers <num_loops>", False, True)


def dining_no_deadlock_main(argv=None):
    """Dining philosophers where the last one reaches right first."""
    return _dining(argv, "usage: dining_philosophers <num_loops>", True, False)


def dining_no_deadlock_print_main(argv=None):
    """The deadlock-free table, printing every step."""
    return _dining(argv, "usage: dining_philosophers <num_loops>", True, True)


def join_main(argv=None):
    """The parent waits on a semaphore that the child posts when done."""
    sem = threading.Semaphore(0)

    def child():
        time.sleep(2)
        _say("child")
        sem.release()

    _say("parent: begin")
    threading.Thread(target=child, daemon=True).start()
    sem.acquire()
    _say("parent: end")
    return 0


def producer_consumer_main(argv=None):
    """Command-line entry point: ``producer_consumer_works <buffersize> <loops> <consumers>``."""
    argv = _args(argv)
    if len(argv) != 3:
        return _usage("usage: producer_consumer_works <buffersize> <loops> <consumers>")
    size, loops, consumers = (_atoi(arg) for arg in argv)
    try:
        produce_consume(size, loops, consumers)
    except ValueError as exc:
        return _usage(str(exc))
    return 0


def rwlock_main(argv=None):
    """Command-line entry point: ``rwlock readloops writeloops``."""
    argv = _args(argv)
    if len(argv) != 2:
        return _usage("usage: rwlock readloops writeloops")
    read_write(_atoi(argv[0]), _atoi(argv[1]))
    _say("all done")
    return 0


def throttle_main(argv=None):
    """Command-line entry point: ``throttle <num_threads> <sem_value>``."""
    argv = _args(argv)
    if len(argv) != 2:
        return _usage("usage: throttle <num_threads> <sem_value>")
    num_threads, sem_value = _atoi(argv[0]), _atoi(argv[1])
    try:
        sem_check = threading.Semaphore(sem_value)
    except ValueError as exc:
        return _usage(str(exc))
    del sem_check
    _say("parent: begin")
    throttle(num_threads, sem_value, 1.0)
    _say("parent: end")
    return 0


def zemaphore_main(argv=None):
    """The parent waits on a Zemaphore that the child posts when done."""
    zem = Zemaphore(0)

    def child():
        time.sleep(4)
        _say("child")
        zem.post()

    _say("parent: begin")
    threading.Thread(target=child, daemon=True).start()
    zem.wait()
    _say("parent: end")
    return 0


if __name__ == "__main__":
    sys.exit(producer_consumer_main())