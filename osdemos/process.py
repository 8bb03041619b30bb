"""Process creation: fork, wait, exec, output redirection and pipes."""

import contextlib
import os
import stat
import sys
import traceback

P4_OUTPUT = "./p4.output"
HW_P2_FILE = "./test.txt"


def _args(argv):
    return sys.argv[1:] if argv is None else argv


def _say(text):
    print(text, flush=True)


def _flush_all():
    for stream in (sys.stdout, sys.stderr):
        with contextlib.suppress(Exception):
            stream.flush()


def _fork():
    """Fork with empty stdio buffers; return the child's pid, 0, or None on failure."""
    _flush_all()
    try:
        return os.fork()
    except OSError:
        print("fork failed", file=sys.stderr)
        return None


def _in_child(work):
    """Run ``work`` in the child process and end the child without returning."""
    code = 0
    try:
        work()
    except BaseException:
        code = 1
        with contextlib.suppress(Exception):
            traceback.print_exc()
    finally:
        _flush_all()
        os._exit(code)


def _exec_wc(target):
    os.execvp("wc", ["wc", target])


def _wc_target(argv):
    argv = _args(argv)
    return argv[0] if argv else __file__


def p1_main(argv=None):
    """Fork; parent and child each say who they are. The parent does not wait."""
    _say(f"hello world (pid:{os.getpid()})")
    rc = _fork()
    if rc is None:
        return 1
    if rc == 0:
        _in_child(lambda: _say(f"hello, I am child (pid:{os.getpid()})"))
    _say(f"hello, I am parent of {rc} (pid:{os.getpid()})")
    return 0


def p2_main(argv=None):
    """Fork; the parent waits for the child before speaking."""
    _say(f"hello world (pid:{os.getpid()})")
    rc = _fork()
    if rc is None:
        return 1
    if rc == 0:

        def child():
            _say(f"hello, I am child (pid:{os.getpid()})")
            import time

            time.sleep(1)

        _in_child(child)
    wc, _ = os.wait()
    _say(f"hello, I am parent of {rc} (wc:{wc}) (pid:{os.getpid()})")
    return 0


def p3_main(argv=None):
    """Fork; the child runs ``wc`` on a file, the parent waits for it.

    The file is the first argument, or this module's own source.
    """
    target = _wc_target(argv)
    _say(f"hello world (pid:{os.getpid()})")
    rc = _fork()
    if rc is None:
        return 1
    if rc == 0:

        def child():
            _say(f"hello, I am child (pid:{os.getpid()})")
            try:
                _exec_wc(target)
            except OSError:
                print("this shouldn't print out", end="")

        _in_child(child)
    wc, _ = os.wait()
    _say(f"hello, I am parent of {rc} (wc:{wc}) (pid:{os.getpid()})")
    return 0


def p4_main(argv=None):
    """Fork; the child sends its standard output to ``p4.output`` and runs ``wc``."""
    target = _wc_target(argv)
    rc = _fork()
    if rc is None:
        return 1
    if rc == 0:

        def child():
            fd = os.open(P4_OUTPUT, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, stat.S_IRWXU)
            if fd != 1:
                os.dup2(fd, 1)
                os.close(fd)
            with contextlib.suppress(OSError):
                _exec_wc(target)

        _in_child(child)
    wc, _ = os.wait()
    if wc < 0:
        raise OSError("wait failed")
    return 0


def hw_p1_main(argv=None):
    """Fork; parent and child each change their own copy of a variable."""
    _say(f"hello world  (pid:{os.getpid()})")
    x = 101
    rc = _fork()
    if rc is None:
        return 1
    if rc == 0:

        def child():
            _say(f"hello child  (pid:{os.getpid()})")
            value = 303
            _say(f"child  x = {value}")

        _in_child(child)
    x = 404
    _say(f"hello parent (pid:{os.getpid()}) of {rc}")
    _say(f"parent x = {x}")
    return 0


def hw_p2_main(argv=None):
    """Open ``test.txt`` for appending, then fork; both processes write to it."""
    _say(f"hello world  (pid:{os.getpid()})")
    shared = open(HW_P2_FILE, "a+")
    rc = _fork()
    if rc is None:
        shared.close()
        return 1
    if rc == 0:

        def child():
            with shared:
                _say(f"hello child  (pid:{os.getpid()})")
                shared.write(f"child {os.getpid()}\n")

        _in_child(child)
    with shared:
        _say(f"hello parent (pid:{os.getpid()}) of {rc}")
        shared.write(f"parent {os.getpid()}\n")
    return 0


def hw_p3_main(argv=None):
    """The child says hello; the parent waits, so goodbye always comes second."""
    rc = _fork()
    if rc is None:
        return 1
    if rc == 0:
        _in_child(lambda: _say("hello"))
    os.wait()
    _say("goodbye")
    return 0


def _stdout_fd():
    try:
        return sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return 1


def hw_p7_main(argv=None):
    """The child closes its standard output before printing, so its hello is lost."""
    rc = _fork()
    if rc is None:
        return 1
    if rc == 0:

        def child():
            os.close(_stdout_fd())
            with contextlib.suppress(OSError, ValueError):
                print("hello", flush=True)

        _in_child(child)
    os.wait()
    _say("goodbye")
    return 0


def _write_all(fd, data):
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        view = view[written:]


def hw_p8_main(argv=None):
    """Send a string from parent to child through a pipe; the child prints it."""
    argv = _args(argv)
    if len(argv) != 1:
        print("Usage: p8 <string>", file=sys.stderr)
        return 1
    try:
        read_fd, write_fd = os.pipe()
    except OSError as exc:
        print(f"pipe: {exc.strerror}", file=sys.stderr)
        return 1
    _flush_all()
    try:
        cpid = os.fork()
    except OSError as exc:
        print(f"fork: {exc.strerror}", file=sys.stderr)
        os.close(read_fd)
        os.close(write_fd)
        return 1
    if cpid == 0:

        def child():
            os.close(write_fd)
            while byte := os.read(read_fd, 1):
                os.write(1, byte)
            os.write(1, b"\n")
            os.close(read_fd)

        _in_child(child)
    os.close(read_fd)
    try:
        _write_all(write_fd, argv[0].encode())
    finally:
        os.close(write_fd)
        os.wait()
    return 0


if __name__ == "__main__":
    sys.exit(p1_main())