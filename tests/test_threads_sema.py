import threading

import pytest

from osdemos.threads_sema import (
    RWLock,
    count_with_binary_semaphore,
    dine,
    dining_deadlock_main,
    dining_no_deadlock_main,
    left,
    produce_consume,
    producer_consumer_main,
    read_write,
    right,
    rwlock_main,
    throttle,
    throttle_main,
)


def test_left_and_right_forks():
    assert [left(p) for p in range(5)] == [0, 1, 2, 3, 4]
    assert [right(p) for p in range(5)] == [1, 2, 3, 4, 0]


def test_dine_without_deadlock_feeds_everyone():
    assert dine(50, True, False) == [50] * 5


def test_dine_verbose_last_philosopher_reaches_right_first(capsys):
    dine(1, True, True)
    lines = capsys.readouterr().out.splitlines()
    stripped = [line.strip() for line in lines]
    assert "4 try 0" in stripped
    assert "try 0" in stripped
    assert " " * 40 + "4: start" in lines
    first = stripped.index("4 try 0")
    second = stripped.index("4 try 4")
    assert first < second


def test_binary_semaphore_counts_exactly():
    assert count_with_binary_semaphore(2000) == 4000


def test_produce_consume_delivers_every_value_once(capsys):
    received = produce_consume(3, 100, 4)
    assert len(received) == 4
    assert sorted(v for seen in received for v in seen) == list(range(100))
    out = capsys.readouterr().out
    assert out.count(" -1\n") == 4


def test_produce_consume_keeps_order_for_one_consumer(capsys):
    assert produce_consume(2, 20, 1) == [list(range(20))]


def test_produce_consume_rejects_too_many_consumers():
    with pytest.raises(ValueError):
        produce_consume(5, 10, 11)


def test_read_write_invariants(capsys):
    reads, counter = read_write(50, 200)
    assert counter == 200
    assert len(reads) == 50
    assert reads == sorted(reads)
    assert all(0 <= value <= 200 for value in reads)
    out = capsys.readouterr().out
    assert "write done" in out
    assert f"read done: {reads[-1]}" in out


def test_rwlock_readers_share_and_block_writer():
    lock = RWLock()
    lock.acquire_readlock()
    lock.acquire_readlock()
    assert lock.readers == 2
    entered = threading.Event()

    def writer():
        lock.acquire_writelock()
        entered.set()
        lock.release_writelock()

    thread = threading.Thread(target=writer)
    thread.start()
    lock.release_readlock()
    assert not entered.wait(0.1)
    lock.release_readlock()
    assert entered.wait(5)
    thread.join()
    assert lock.readers == 0


def test_throttle_limits_concurrency(capsys):
    peak = throttle(6, 2, 0.05)
    assert 1 <= peak <= 2
    out = capsys.readouterr().out
    assert sorted(out.splitlines()) == sorted(f"child {i}" for i in range(6))


def test_throttle_rejects_negative_value():
    with pytest.raises(ValueError):
        throttle(1, -1, 0.0)


def test_dining_main_prints_start_and_finish(capsys):
    assert dining_no_deadlock_main(["3"]) == 0
    assert capsys.readouterr().out == "dining: started\ndining: finished\n"


@pytest.mark.parametrize(
    "entry, argv",
    [
        (dining_deadlock_main, []),
        (dining_no_deadlock_main, ["1", "2"]),
        (producer_consumer_main, ["1", "2"]),
        (rwlock_main, ["1"]),
        (throttle_main, []),
    ],
)
def test_mains_reject_wrong_argument_count(entry, argv, capsys):
    assert entry(argv) == 1
    assert "usage:" in capsys.readouterr().err


def test_rwlock_main_finishes(capsys):
    assert rwlock_main(["3", "5"]) == 0
    out = capsys.readouterr().out
    assert out.endswith("all done\n")


def test_producer_consumer_main_rejects_too_many_consumers(capsys):
    assert producer_consumer_main(["2", "5", "11"]) == 1