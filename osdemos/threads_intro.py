"""Two threads printing, and two threads racing on a shared counter."""

import re
import sys
import threading

_ATOI = re.compile(r"\s*([+-]?\d+)")


def _atoi(text):
    match = _ATOI.match(text)
    value = int(match.group(1)) if match else 0
    return (value + 2**31) % 2**32 - 2**31


class _Shared:
    def __init__(self):
        self.counter = 0


def print_letters(letters=("A", "B")):
    """Start one thread per letter, each printing it; return them in print order."""
    printed = []
    lock = threading.Lock()

    def mythread(letter):
        with lock:
            print(letter, flush=True)
            printed.append(letter)

    threads = [threading.Thread(target=mythread, args=(letter,)) for letter in letters]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return printed


def _count_into(max_count, shared):
    def mythread(letter):
        local = [0]
        print(f"{letter}: begin [addr of i: {hex(id(local))}]", flush=True)
        for _ in range(max_count):
            shared.counter = shared.counter + 1
        print(f"{letter}: done", flush=True)

    threads = [threading.Thread(target=mythread, args=(letter,)) for letter in "AB"]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return shared.counter


def shared_count(max_count):
    """Threads ``A`` and ``B`` each add 1 to a shared counter ``max_count`` times."""
    return _count_into(max_count, _Shared())


def t0_main(argv=None):
    """Command-line entry point: two threads print A and B."""
    if argv is None:
        argv = sys.argv[1:]
    if argv:
        print("usage: main", file=sys.stderr)
        return 1
    print("main: begin")
    print_letters(("A", "B"))
    print("main: end")
    return 0


def t1_main(argv=None):
    """Command-line entry point: ``t1 <loopcount>``."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        print("usage: main-first <loopcount>", file=sys.stderr)
        return 1
    max_count = _atoi(argv[0])
    shared = _Shared()
    print(f"main: begin [counter = {shared.counter}] [{id(shared):x}]")
    counter = _count_into(max_count, shared)
    print(f"main: done\n [counter: {counter}]\n [should: {max_count * 2}]")
    return 0


if __name__ == "__main__":
    sys.exit(t1_main())