import threading

import pytest

from osdemos.threads_cv import (
    BoundedBuffer,
    Synchronizer,
    join_main,
    join_modular_main,
    pc_main,
    pc_single_cv_main,
    run_producer_consumer,
)


def test_synchronizer_signal_before_wait_returns_and_resets():
    sync = Synchronizer()
    sync.signal()
    sync.wait()
    waiter = threading.Thread(target=sync.wait, daemon=True)
    waiter.start()
    waiter.join(0.1)
    assert waiter.is_alive()
    sync.signal()
    waiter.join(2)
    assert not waiter.is_alive()


def test_buffer_is_fifo_across_wraparound():
    buffer = BoundedBuffer(2)
    got = []
    for value in range(5):
        buffer.put(value)
        buffer.put(value + 10)
        got.append(buffer.get())
        got.append(buffer.get())
    assert got == [0, 10, 1, 11, 2, 12, 3, 13, 4, 14]
    assert len(buffer) == 0


def test_put_blocks_while_full():
    buffer = BoundedBuffer(1, single_cv=True)
    buffer.put(5)
    putter = threading.Thread(target=buffer.put, args=(6,), daemon=True)
    putter.start()
    putter.join(0.1)
    assert putter.is_alive()
    assert buffer.get() == 5
    putter.join(2)
    assert not putter.is_alive()
    assert buffer.get() == 6


def test_buffer_rejects_non_positive_size():
    with pytest.raises(ValueError):
        BoundedBuffer(0)


@pytest.mark.parametrize("consumers", [1, 2, 3])
def test_producer_consumer_delivers_every_value_once(consumers):
    received = run_producer_consumer(3, 50, consumers)
    assert len(received) == consumers
    assert sorted(v for seen in received for v in seen) == list(range(50))
    for seen in received:
        assert seen == sorted(seen)


def test_single_cv_with_one_consumer_keeps_order():
    received = run_producer_consumer(1, 20, 1, single_cv=True)
    assert received == [list(range(20))]


def test_join_main_output(capsys):
    assert join_main([]) == 0
    assert capsys.readouterr().out.splitlines() == ["parent: begin", "child", "parent: end"]


def test_join_modular_main_output(capsys):
    assert join_modular_main([]) == 0
    assert capsys.readouterr().out.splitlines() == ["parent: begin", "child", "parent: end"]


def test_pc_main_runs():
    assert pc_main(["2", "10", "2"]) == 0
    assert pc_single_cv_main(["2", "10", "1"]) == 0


def test_pc_main_usage(capsys):
    assert pc_main(["2"]) == 1
    assert "<buffersize> <loops> <consumers>" in capsys.readouterr().err


def test_pc_main_rejects_zero_buffer(capsys):
    assert pc_main(["0", "10", "1"]) == 1
    assert "buffer size" in capsys.readouterr().err