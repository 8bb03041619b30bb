"""Common concurrency bugs: atomicity violation, ordering violation and deadlock."""

import contextlib
import sys
import threading
import time
from dataclasses import dataclass

PR_STATE_INIT = 0

_T2_INDENT = " " * 17
_DEADLOCK_T2_INDENT = " " * 27


class _Runner(threading.Thread):
    """A thread that keeps the value its routine returned, or the error it raised."""

    def __init__(self, routine):
        super().__init__(daemon=True)
        self._routine = routine
        self.result = None
        self.error = None

    def run(self):
        try:
            self.result = self._routine()
        except BaseException as exc:
            self.error = exc

    def outcome(self):
        self.join()
        if self.error is not None:
            raise self.error
        return self.result


class PrThread:
    """A started thread together with a state word initialised before it runs."""

    def __init__(self, start_routine):
        self.state = PR_STATE_INIT
        self._runner = _Runner(start_routine)
        self._runner.start()

    def wait(self):
        """Wait for the thread; return its result or raise what it raised."""
        return self._runner.outcome()


def create_thread(start_routine, delay=1.0):
    """Start ``start_routine`` in a new thread, then pause ``delay`` seconds."""
    thread = PrThread(start_routine)
    time.sleep(delay)
    return thread


@dataclass
class _Proc:
    pid: int


@dataclass
class _ThreadInfo:
    proc_info: "_Proc | None"


def _say(text):
    print(text, flush=True)


def run_atomicity(fixed=False, check_delay=2.0, clear_delay=1.0):
    """One thread checks and later uses a field that another thread clears.

    Returns the pid the first thread used, or None if it found the field clear.
    Without the lock the field can vanish between check and use, which raises
    RuntimeError.
    """
    info = _ThreadInfo(_Proc(100))
    guard = threading.Lock() if fixed else contextlib.nullcontext()

    def thread1():
        _say("t1: before check")
        with guard:
            if info.proc_info is None:
                return None
            _say("t1: after check")
            time.sleep(check_delay)
            _say("t1: use!")
            proc = info.proc_info
            if proc is None:
                raise RuntimeError("proc_info was cleared between its check and its use")
            _say(str(proc.pid))
            return proc.pid

    def thread2():
        _say(f"{_T2_INDENT}t2: begin")
        time.sleep(clear_delay)
        with guard:
            _say(f"{_T2_INDENT}t2: set to NULL")
            info.proc_info = None

    first, second = _Runner(thread1), _Runner(thread2)
    first.start()
    second.start()
    try:
        pid = first.outcome()
    finally:
        second.outcome()
    return pid


def run_deadlock(timeout=None):
    """Two threads take two locks in opposite orders.

    With a timeout, a thread that cannot get its second lock gives up and
    releases its first. Returns True when both threads got both locks.
    """
    l1, l2 = threading.Lock(), threading.Lock()

    def lock_pair(prefix, first, first_name, second, second_name):
        def routine():
            _say(f"{prefix}begin")
            _say(f"{prefix}try to acquire {first_name}...")
            first.acquire()
            _say(f"{prefix}{first_name} acquired")
            _say(f"{prefix}try to acquire {second_name}...")
            if timeout is None:
                got = second.acquire()
            else:
                got = second.acquire(timeout=timeout)
            if not got:
                _say(f"{prefix}{second_name} not acquired: giving up (deadlock)")
                first.release()
                return False
            _say(f"{prefix}{second_name} acquired")
            l1.release()
            l2.release()
            return True

        return routine

    runners = [
        _Runner(lock_pair("t1: ", l1, "L1", l2, "L2")),
        _Runner(lock_pair(f"{_DEADLOCK_T2_INDENT}t2: ", l2, "L2", l1, "L1")),
    ]
    for runner in runners:
        runner.start()
    results = [runner.outcome() for runner in runners]
    return all(results)


def run_ordering(fixed=False, delay=1.0):
    """A thread reads the state of its own thread structure; return that state.

    Unless fixed, the thread may run before the structure is published, which
    raises RuntimeError.
    """

    class _Shared:
        thread = None
        ready = False

    shared = _Shared()
    cond = threading.Condition()

    def m_main():
        _say("mMain: begin")
        if fixed:
            with cond:
                while not shared.ready:
                    cond.wait()
        created = shared.thread
        if created is None:
            raise RuntimeError("mMain ran before its thread structure was initialized")
        state = created.state
        _say(f"mMain: state is {state}")
        return state

    m_thread = create_thread(m_main, delay)
    shared.thread = m_thread
    if fixed:
        with cond:
            shared.ready = True
            cond.notify()
    return m_thread.wait()


def _no_args(argv):
    if argv is None:
        argv = sys.argv[1:]
    if argv:
        print("usage: main", file=sys.stderr)
        return False
    return True


def _atomicity(argv, fixed):
    if not _no_args(argv):
        return 1
    _say("main: begin")
    try:
        run_atomicity(fixed, 2.0, 1.0)
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        return 1
    _say("main: end")
    return 0


def atomicity_main(argv=None):
    """Check-then-use without a lock."""
    return _atomicity(argv, False)


def atomicity_fixed_main(argv=None):
    """Check-then-use under a lock."""
    return _atomicity(argv, True)


def deadlock_main(argv=None):
    """Two threads lock L1 and L2 in opposite orders and may block forever."""
    if not _no_args(argv):
        return 1
    _say("main: begin")
    run_deadlock(None)
    _say("main: end")
    return 0


def _ordering(fixed):
    _say("ordering: begin")
    try:
        run_ordering(fixed, 1.0)
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        return 1
    _say("ordering: end")
    return 0


def ordering_main(argv=None):
    """A thread may read its structure before it is set."""
    return _ordering(False)


def ordering_fixed_main(argv=None):
    """The thread waits on a condition variable until its structure is set."""
    return _ordering(True)


if __name__ == "__main__":
    sys.exit(atomicity_main())