import threading

from osdemos.cas import AtomicInt, main


def test_successful_swap():
    cell = AtomicInt(0)
    assert cell.compare_and_swap(0, 100) is True
    assert cell.value == 100


def test_failing_swap_leaves_value():
    cell = AtomicInt(100)
    assert cell.compare_and_swap(0, 200) is False
    assert cell.value == 100


def test_default_value_is_zero():
    cell = AtomicInt()
    assert cell.compare_and_swap(0, 7) is True
    assert cell.value == 7


def test_concurrent_increments_are_not_lost():
    cell = AtomicInt(0)

    def worker():
        for _ in range(500):
            while True:
                current = cell.value
                if cell.compare_and_swap(current, current + 1):
                    break

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert cell.value == 2000


def test_main_output(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "before successful cas: 0",
        "after successful cas: 100 (success: 1)",
        "before failing cas: 100",
        "after failing cas: 100 (old: 0)",
    ]