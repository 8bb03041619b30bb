"""A stack of integers that lives in a memory-mapped file and persists between runs."""

import mmap
import os
import re
import struct
import sys

_HEADER = struct.Struct("@N")  # item count, a native size_t
_ITEM = struct.Struct("@i")  # one native int
_ATOI = re.compile(r"\s*([+-]?\d+)")

DEFAULT_PATH = "ps.img"


def _atoi(text):
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _to_int32(value):
    return (value + 2**31) % 2**32 - 2**31


class PersistentStack:
    """Integer stack stored in a backing file through a shared memory mapping.

    The first bytes of the file hold the item count; the rest holds the items.
    """

    def __init__(self, path):
        self._file = open(path, "r+b")
        try:
            size = os.fstat(self._file.fileno()).st_size
            if size < _HEADER.size or size % _ITEM.size != 0:
                raise ValueError(
                    f"backing file size {size} must be at least {_HEADER.size} "
                    f"and a multiple of {_ITEM.size}"
                )
            self._map = mmap.mmap(self._file.fileno(), size)
        except BaseException:
            self._file.close()
            raise
        self._size = size

    @property
    def capacity(self):
        """The largest number of items the backing file can hold."""
        return (self._size - _HEADER.size) // _ITEM.size

    def __len__(self):
        return _HEADER.unpack_from(self._map, 0)[0]

    def _set_len(self, n):
        _HEADER.pack_into(self._map, 0, n)

    def push(self, value):
        """Push ``value``; return False and leave the stack alone if it is full."""
        n = len(self)
        if _HEADER.size + (n + 1) * _ITEM.size > self._size:
            return False
        _ITEM.pack_into(self._map, _HEADER.size + n * _ITEM.size, _to_int32(value))
        self._set_len(n + 1)
        return True

    def pop(self):
        """Remove and return the top item, or None if the stack is empty."""
        n = len(self)
        if n == 0:
            return None
        n -= 1
        value = _ITEM.unpack_from(self._map, _HEADER.size + n * _ITEM.size)[0]
        self._set_len(n)
        return value

    def close(self):
        """Flush and release the mapping and the backing file."""
        if not self._map.closed:
            self._map.flush()
            self._map.close()
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def run(commands, path=DEFAULT_PATH):
    """Apply ``pop`` and push commands in order; return the popped values."""
    popped = []
    with PersistentStack(path) as stack:
        for command in commands:
            if command == "pop":
                value = stack.pop()
                if value is not None:
                    popped.append(value)
            else:
                stack.push(_atoi(command))
    return popped


def main(argv=None):
    """Run the commands given on the command line against ``ps.img``."""
    if argv is None:
        argv = sys.argv[1:]
    for value in run(argv, DEFAULT_PATH):
        print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())