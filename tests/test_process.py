import os
import re

import pytest

from osdemos import process


def _reap(pid):
    waited, status = os.waitpid(pid, 0)
    assert waited == pid
    assert os.waitstatus_to_exitcode(status) == 0


def _wc_counts(text, path):
    for line in text.splitlines():
        tokens = line.split()
        if tokens and tokens[-1] == str(path):
            return [int(token) for token in tokens[:3]]
    raise AssertionError(f"no wc line for {path} in {text!r}")


def test_p1_parent_and_child_report_pids(capfd):
    assert process.p1_main([]) == 0
    out = capfd.readouterr().out
    match = re.search(r"hello, I am parent of (\d+) \(pid:(\d+)\)", out)
    assert match
    child = int(match.group(1))
    assert int(match.group(2)) == os.getpid()
    _reap(child)
    out += capfd.readouterr().out
    assert f"hello world (pid:{os.getpid()})" in out
    assert f"hello, I am child (pid:{child})" in out
    assert out.count("hello world") == 1


def test_p2_parent_waits_for_child(capfd):
    assert process.p2_main([]) == 0
    lines = capfd.readouterr().out.splitlines()
    assert lines[0] == f"hello world (pid:{os.getpid()})"
    match = re.fullmatch(r"hello, I am parent of (\d+) \(wc:(\d+)\) \(pid:(\d+)\)", lines[2])
    assert match
    assert match.group(1) == match.group(2)
    assert lines[1] == f"hello, I am child (pid:{match.group(1)})"


def test_p3_child_runs_wc(capfd, tmp_path):
    content = "one two\nthree\n"
    target = tmp_path / "words.txt"
    target.write_text(content)
    assert process.p3_main([str(target)]) == 0
    out = capfd.readouterr().out
    expected = [content.count("\n"), len(content.split()), len(content.encode())]
    assert _wc_counts(out, target) == expected
    lines = out.splitlines()
    assert lines[1].startswith("hello, I am child")
    assert lines[-1].startswith("hello, I am parent of")
    assert "this shouldn't print out" not in out


def test_p4_redirects_child_output(capfd, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    content = "alpha beta gamma\n"
    (tmp_path / "input.txt").write_text(content)
    assert process.p4_main(["input.txt"]) == 0
    assert capfd.readouterr().out == ""
    written = (tmp_path / "p4.output").read_text()
    assert _wc_counts(written, "input.txt") == [1, 3, len(content)]


def test_hw_p1_each_process_has_its_own_x(capfd):
    assert process.hw_p1_main([]) == 0
    out = capfd.readouterr().out
    match = re.search(r"hello parent \(pid:(\d+)\) of (\d+)", out)
    assert match
    assert int(match.group(1)) == os.getpid()
    child = int(match.group(2))
    _reap(child)
    out += capfd.readouterr().out
    assert "parent x = 404" in out
    assert "child  x = 303" in out
    assert f"hello child  (pid:{child})" in out


def test_hw_p2_both_processes_append(capfd, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert process.hw_p2_main([]) == 0
    out = capfd.readouterr().out
    match = re.search(r"hello parent \(pid:\d+\) of (\d+)", out)
    assert match
    child = int(match.group(1))
    _reap(child)
    lines = (tmp_path / "test.txt").read_text().splitlines()
    assert sorted(lines) == sorted([f"child {child}", f"parent {os.getpid()}"])


def test_hw_p3_hello_before_goodbye(capfd):
    assert process.hw_p3_main([]) == 0
    assert capfd.readouterr().out.splitlines() == ["hello", "goodbye"]


def test_hw_p7_child_output_is_lost(capfd):
    assert process.hw_p7_main([]) == 0
    assert capfd.readouterr().out.splitlines() == ["goodbye"]


@pytest.mark.parametrize("text", ["hello pipe", "x", "naïve café"])
def test_hw_p8_pipe_round_trip(capfd, text):
    assert process.hw_p8_main([text]) == 0
    assert capfd.readouterr().out == text + "\n"


def test_hw_p8_usage(capfd):
    assert process.hw_p8_main([]) == 1
    captured = capfd.readouterr()
    assert captured.err.startswith("Usage:")
    assert captured.out == ""