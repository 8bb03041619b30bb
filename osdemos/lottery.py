"""Lottery scheduling: draw a winning ticket and walk the job list to find its owner."""

import re
import sys
from collections import deque

_ATOI = re.compile(r"\s*([+-]?\d+)")
_USAGE = "usage: lottery <seed> <loops>"


def _atoi(text):
    match = _ATOI.match(text)
    value = int(match.group(1)) if match else 0
    return (value + 2**31) % 2**32 - 2**31


class _Random:
    """The additive feedback generator behind the C library's srandom()/random()."""

    def __init__(self, seed):
        seed &= 0xFFFFFFFF
        if seed == 0:
            seed = 1
        word = seed - 2**32 if seed >= 2**31 else seed
        state = [word & 0xFFFFFFFF]
        for _ in range(30):
            hi = int(word / 127773)
            lo = word - hi * 127773
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += 2147483647
            state.append(word & 0xFFFFFFFF)
        state.extend(state[:3])
        self._state = deque(state[-31:], maxlen=31)
        for _ in range(310):
            self._step()

    def _step(self):
        value = (self._state[-31] + self._state[-3]) & 0xFFFFFFFF
        self._state.append(value)
        return value

    def random(self):
        return self._step() >> 1


class Lottery:
    """A list of jobs, each holding some number of tickets; newest job first."""

    def __init__(self):
        self.jobs = deque()
        self.total = 0

    def insert(self, tickets):
        """Add a job with ``tickets`` tickets at the head of the list."""
        self.jobs.appendleft(tickets)
        self.total += tickets

    def pick(self, winner):
        """Return the ticket count of the job that holds ticket number ``winner``."""
        counter = 0
        for tickets in self.jobs:
            counter += tickets
            if counter > winner:
                return tickets
        raise ValueError(f"winning ticket {winner} is outside the {self.total} tickets held")

    def format_list(self):
        """Render the job list the way the scheduler prints it."""
        return "List: " + "".join(f"[{tickets}] " for tickets in self.jobs)


def _default_lottery():
    lottery = Lottery()
    for tickets in (50, 100, 25):
        lottery.insert(tickets)
    return lottery


def simulate(seed, loops):
    """Run ``loops`` draws with the given seed; return (winner, tickets) pairs."""
    lottery = _default_lottery()
    rng = _Random(seed)
    results = []
    for _ in range(loops):
        winner = rng.random() % lottery.total
        results.append((winner, lottery.pick(winner)))
    return results


def main(argv=None):
    """Command-line entry point: ``lottery <seed> <loops>``."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 2:
        print(_USAGE, file=sys.stderr)
        return 1
    seed, loops = _atoi(argv[0]), _atoi(argv[1])
    listing = _default_lottery().format_list()
    print(listing)
    for winner, tickets in simulate(seed, loops):
        print(listing)
        print(f"winner: {winner} {tickets}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())