"""An integer cell with an atomic compare-and-swap."""

import sys
import threading


class AtomicInt:
    """An integer whose compare-and-swap happens as one indivisible step."""

    def __init__(self, value=0):
        self._value = value
        self._lock = threading.Lock()

    @property
    def value(self):
        """The current value."""
        return self._value

    def compare_and_swap(self, old, new):
        """Set the value to ``new`` if it equals ``old``; return whether it did."""
        with self._lock:
            if self._value != old:
                return False
            self._value = new
            return True


def main(argv=None):
    """Show one compare-and-swap that succeeds and one that fails."""
    cell = AtomicInt(0)
    print(f"before successful cas: {cell.value}")
    success = cell.compare_and_swap(0, 100)
    print(f"after successful cas: {cell.value} (success: {int(success)})")

    print(f"before failing cas: {cell.value}")
    success = cell.compare_and_swap(0, 200)
    print(f"after failing cas: {cell.value} (old: {int(success)})")
    return 0


if __name__ == "__main__":
    sys.exit(main())