"""Introductory demonstrations: CPU, memory, threads, I/O and the address space."""

import os
import re
import sys
import threading

from osdemos.common import spin

_ATOI = re.compile(r"\s*([+-]?\d+)")


def _atoi(text):
    match = _ATOI.match(text)
    value = int(match.group(1)) if match else 0
    return (value + 2**31) % 2**32 - 2**31


def _usage(message):
    print(message, file=sys.stderr)
    return 1


class _Counter:
    def __init__(self):
        self.value = 0


def write_hello(path):
    """Write ``hello world`` to ``path``, force it to disk, return bytes written."""
    data = b"hello world\n"
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        written = os.write(fd, data)
        if written != len(data):
            raise OSError(f"short write: {written} of {len(data)} bytes")
        os.fsync(fd)
    finally:
        os.close(fd)
    return written


def count_concurrently(loops, workers=2):
    """Let ``workers`` threads each bump a shared counter ``loops`` times, unlocked."""
    counter = _Counter()

    def worker():
        for _ in range(loops):
            counter.value += 1

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return counter.value


def cpu_main(argv=None):
    """Print the given string once a second, forever."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        return _usage("usage: cpu <string>")
    while True:
        print(argv[0], flush=True)
        spin(1)


def mem_main(argv=None):
    """Show where a value lives, then increment it once a second, forever."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        return _usage("usage: mem <value>")
    pid = os.getpid()
    cell = [0]
    print(f"({pid}) addr pointed to by p: {hex(id(cell))}", flush=True)
    cell[0] = _atoi(argv[0])
    while True:
        spin(1)
        cell[0] += 1
        print(f"({pid}) value of p: {cell[0]}", flush=True)


def io_main(argv=None):
    """Write a greeting to /tmp/file."""
    write_hello("/tmp/file")
    return 0


def threads_main(argv=None):
    """Two threads share an unprotected counter: ``threads <loops>``."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        return _usage("usage: threads <loops>")
    loops = _atoi(argv[0])
    print("Initial value : 0")
    print(f"Final value   : {count_concurrently(loops, 2)}")
    return 0


def va_main(argv=None):
    """Print where code, heap and stack objects are placed."""
    heap = bytearray(100_000_000)
    x = 3
    print(f"location of code : {hex(id(va_main))}")
    print(f"location of heap : {hex(id(heap))}")
    print(f"location of stack: {hex(id(x))}")
    return 0


if __name__ == "__main__":
    sys.exit(threads_main())