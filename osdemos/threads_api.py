"""Creating threads, passing them arguments and collecting what they return."""

import sys
import threading
from dataclasses import dataclass


@dataclass
class MyArg:
    """Two arguments handed to a thread."""

    a: int
    b: int


@dataclass
class MyRet:
    """Two values handed back by a thread."""

    x: int
    y: int


def run_in_thread(func, *args):
    """Run ``func(*args)`` in a new thread, wait for it, and return its result.

    An exception raised in the thread is raised again in the caller.
    """
    outcome = {}

    def target():
        try:
            outcome["value"] = func(*args)
        except BaseException as exc:
            outcome["error"] = exc

    thread = threading.Thread(target=target)
    thread.start()
    thread.join()
    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("value")


def thread_create_main(argv=None):
    """A thread prints the two arguments it was given."""

    def mythread(args):
        print(f"{args.a} {args.b}", flush=True)

    run_in_thread(mythread, MyArg(10, 20))
    print("done")
    return 0


def simple_args_main(argv=None):
    """A thread prints a number and returns it plus one."""

    def mythread(value):
        print(value, flush=True)
        return value + 1

    rvalue = run_in_thread(mythread, 100)
    print(f"returned {rvalue}")
    return 0


def with_return_args_main(argv=None):
    """A thread takes a pair of arguments and returns a pair of values."""

    def mythread(args):
        print(f"args {args.a} {args.b}", flush=True)
        return MyRet(1, 2)

    rvals = run_in_thread(mythread, MyArg(10, 20))
    print(f"returned {rvals.x} {rvals.y}")
    return 0


if __name__ == "__main__":
    sys.exit(with_return_args_main())