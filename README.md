# osdemos

Small, self-contained programs that show how an operating system behaves:
creating processes, running threads, racing on shared data, locking,
condition variables, semaphores, lottery scheduling, UDP messaging and a
stack that lives in a memory-mapped file.

Each demonstration can be run from the command line. The building blocks
behind them can also be imported. Commands given the wrong number of
arguments print a usage line to standard error and exit with status 1.

## Processes

The commands in `osdemos.process` create processes with `os.fork`, so they
need a POSIX system.

    osdemos-p1            # fork: parent and child print their pids; no wait
    osdemos-p2            # fork, then the parent waits for the child
    osdemos-p3 [file]     # fork, then the child runs "wc" on the file
    osdemos-p4 [file]     # like p3, with the child's output sent to ./p4.output
    osdemos-hw-p8 hello   # the parent sends a string to the child over a pipe

Without a file argument, `osdemos-p3` and `osdemos-p4` count the
`osdemos/process.py` source file itself. They need a `wc` program on the
`PATH`.

The other process commands:

    osdemos-hw-p1   # parent and child change their own copies of a variable
    osdemos-hw-p2   # both processes append a line to ./test.txt
    osdemos-hw-p3   # the child prints "hello", the parent waits, then "goodbye"
    osdemos-hw-p7   # the child closes its standard output, so only "goodbye" shows

## Virtualising the CPU and memory

    osdemos-cpu A           # print "A" once a second, forever
    osdemos-mem 0           # increment a value once a second, showing the pid
    osdemos-io              # write "hello world" to /tmp/file and fsync it
    osdemos-threads 100000  # two threads increment a shared counter unlocked
    osdemos-va              # show where a function, a heap buffer and a local live

`osdemos-cpu` and `osdemos-mem` busy-wait with `osdemos.common.spin` and run
until interrupted. The "addresses" printed by `osdemos-mem` and `osdemos-va`
are object identities as Python reports them.

From Python, `osdemos.intro.write_hello(path)` writes the greeting to any
path and returns the number of bytes written, and
`osdemos.intro.count_concurrently(loops, workers=2)` returns the final value
of the shared counter.

## Scheduling

    osdemos-lottery 1 10  # draw ten lottery winners with seed 1

The jobs are inserted with 50, 100 and 25 tickets, newest first, so the list
prints as `List: [25] [100] [50] `. Each draw prints the list and then
`winner: <ticket> <tickets of the job holding it>`. The draws come from a
generator with the same sequence as the C library's `srandom`/`random`, so a
given seed always gives the same winners.

```python
from osdemos.lottery import Lottery, simulate

lottery = Lottery()
lottery.insert(50)
lottery.insert(100)
lottery.insert(25)
print(lottery.format_list())   # List: [25] [100] [50]
print(lottery.pick(30))        # 100: tickets 25..124 belong to that job

print(simulate(1, 3))          # three (winner, tickets) pairs
```

`Lottery.pick` raises `ValueError` for a ticket number beyond the tickets held.

## Threads

    osdemos-t0                    # two threads print "A" and "B"
    osdemos-t1 1000000            # two threads race on a shared counter
    osdemos-thread-create         # pass a structure to a thread
    osdemos-thread-simple-args    # pass a number in, get a number back
    osdemos-thread-return-args    # return a structure from a thread

`osdemos.threads_api.run_in_thread(func, *args)` runs a function in a new
thread, waits for it and returns its result; an exception raised in the
thread is raised again in the caller. `MyArg` and `MyRet` are the small
dataclasses the demonstrations pass in and get back.

### Concurrency bugs

    osdemos-atomicity       osdemos-atomicity-fixed
    osdemos-ordering        osdemos-ordering-fixed
    osdemos-deadlock        # may hang: that is the point

In `osdemos.threads_bugs`, `run_atomicity(fixed, check_delay, clear_delay)`
and `run_ordering(fixed, delay)` raise `RuntimeError` when the bug shows
itself; the matching commands then print the error and exit with status 1.
`run_deadlock(timeout)` returns `True` when both threads got both locks; with
a timeout, a thread that cannot get its second lock gives up instead of
blocking forever, and the call returns `False`.

### Condition variables

    osdemos-cv-join               # wait with a lock, a condition and a flag
    osdemos-cv-join-spin          # spin on a flag (about five seconds)
    osdemos-cv-join-no-lock       # signal without the lock: the parent hangs
    osdemos-cv-join-no-state-var  # no flag: the signal is lost, the parent hangs
    osdemos-cv-join-modular       # wait through a Synchronizer
    osdemos-pc 1 10 1             # <buffersize> <loops> <consumers>
    osdemos-pc-single-cv 1 10 2   # one shared condition; can stall with many consumers

`osdemos.threads_cv` also offers `Synchronizer` (a one-shot signal that
resets after each wait), `BoundedBuffer(size, single_cv=False)` with `put`
and `get`, and `run_producer_consumer(buffer_size, loops, consumers,
single_cv=False)`, which returns the values each consumer received.

### Semaphores

    osdemos-binary                      # a semaphore used as a lock
    osdemos-sema-join                   # a semaphore used to wait for a child
    osdemos-zemaphore                   # the same, with osdemos.common.Zemaphore
    osdemos-producer-consumer 4 20 2    # <buffersize> <loops> <consumers>, at most 10
    osdemos-rwlock 10 10                # <readloops> <writeloops>
    osdemos-throttle 10 3               # <num_threads> <sem_value>
    osdemos-dining-no-deadlock 1000     # <num_loops>
    osdemos-dining-no-deadlock-print 3
    osdemos-dining-deadlock 1000        # may hang: that is the point
    osdemos-dining-deadlock-print 3

In `osdemos.threads_sema`: `RWLock`, `left(p)` and `right(p)`,
`dine(num_loops, avoid_deadlock=True, verbose=False)` returning the meals each
philosopher had, `count_with_binary_semaphore(loops)`,
`produce_consume(buffer_size, loops, consumers)`,
`read_write(read_loops, write_loops)` returning the values read and the
final counter, and `throttle(num_threads, sem_value, hold=1.0)` returning the
largest number of children seen working at once.

### Atomic instructions

    osdemos-cas           # a compare-and-swap that succeeds, then one that fails

## Distributed systems

Start the server in one terminal and the client in another:

    osdemos-udp-server    # listens on port 10000 and answers every message
    osdemos-udp-client    # sends "hello world" from port 20000 and prints the reply

Messages are NUL-padded to 1000 bytes. The server replies "goodbye world" and
runs until interrupted. The socket helpers live in `osdemos.udp`
(`udp_open`, `udp_fill_sock_addr`, `udp_write`, `udp_read`, `udp_close`);
`osdemos.dist` has `pad_message`, `decode_message`, `serve_once` and
`run_client`.

## A persistent stack

`osdemos-pstack` keeps a stack of integers in `ps.img` in the current
directory. The file must already exist; its size must be at least the size
of the item count and a multiple of the item size, and it sets the capacity.
Every argument is either `pop`, which prints the top item, or a number to
push. Popping an empty stack and pushing onto a full one do nothing. Items
pushed in one run are still there in the next:

    osdemos-pstack 7 13 47 pop      # prints 47
    osdemos-pstack pop pop 99       # prints 13, then 7
    osdemos-pstack pop              # prints 99

The stack is also available from Python:

```python
from pathlib import Path
from osdemos.pstack import PersistentStack, run

Path("ps.img").write_bytes(bytes(4096))

with PersistentStack("ps.img") as stack:
    stack.push(7)
    stack.push(13)
    print(stack.pop())     # 13
    print(len(stack))      # 1
    print(stack.capacity)  # how many items the file can hold

print(run(["pop"], "ps.img"))   # [7]
```

`push` returns `False` when the stack is full and `pop` returns `None` when it
is empty. A backing file of the wrong size raises `ValueError`.

## Building blocks

```python
from osdemos.common import Zemaphore, get_time, spin
from osdemos.cas import AtomicInt

done = Zemaphore(0)   # a counting semaphore built from a lock and a condition
done.post()
done.wait()

start = get_time()
spin(1)               # busy-wait for one second

counter = AtomicInt(0)
counter.compare_and_swap(0, 100)   # True: the value was 0
counter.compare_and_swap(0, 200)   # False: the value is now 100
print(counter.value)               # 100
```

## Limits

The process demonstrations rely on `os.fork` and do not run on Windows.
Several commands are meant to hang or run forever (`osdemos-cpu`,
`osdemos-mem`, `osdemos-udp-server`, `osdemos-deadlock`,
`osdemos-dining-deadlock`, the no-lock and no-state-variable joins); stop
them with Ctrl-C.

## Tests

The test suite uses pytest and is installed with the `test` extra.