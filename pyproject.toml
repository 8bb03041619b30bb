[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osdemos"
version = "0.1.0"
description = "Small runnable demonstrations of operating-system ideas: processes, threads, locks, condition variables, semaphores, scheduling, memory and persistence."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating systems",
    "education",
    "threads",
    "semaphores",
    "condition variables",
    "scheduling",
    "fork",
    "udp",
    "mmap",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
osdemos-pstack = "osdemos.pstack:main"
osdemos-lottery = "osdemos.lottery:main"
osdemos-udp-client = "osdemos.dist:client_main"
osdemos-udp-server = "osdemos.dist:server_main"
osdemos-cpu = "osdemos.intro:cpu_main"
osdemos-mem = "osdemos.intro:mem_main"
osdemos-io = "osdemos.intro:io_main"
osdemos-threads = "osdemos.intro:threads_main"
osdemos-va = "osdemos.intro:va_main"
osdemos-t0 = "osdemos.threads_intro:t0_main"
osdemos-t1 = "osdemos.threads_intro:t1_main"
osdemos-thread-create = "osdemos.threads_api:thread_create_main"
osdemos-thread-simple-args = "osdemos.threads_api:simple_args_main"
osdemos-thread-return-args = "osdemos.threads_api:with_return_args_main"
osdemos-atomicity = "osdemos.threads_bugs:atomicity_main"
osdemos-atomicity-fixed = "osdemos.threads_bugs:atomicity_fixed_main"
osdemos-deadlock = "osdemos.threads_bugs:deadlock_main"
osdemos-ordering = "osdemos.threads_bugs:ordering_main"
osdemos-ordering-fixed = "osdemos.threads_bugs:ordering_fixed_main"
osdemos-cv-join = "osdemos.threads_cv:join_main"
osdemos-cv-join-spin = "osdemos.threads_cv:join_spin_main"
osdemos-cv-join-no-lock = "osdemos.threads_cv:join_no_lock_main"
osdemos-cv-join-no-state-var = "osdemos.threads_cv:join_no_state_var_main"
osdemos-cv-join-modular = "osdemos.threads_cv:join_modular_main"
osdemos-pc = "osdemos.threads_cv:pc_main"
osdemos-pc-single-cv = "osdemos.threads_cv:pc_single_cv_main"
osdemos-binary = "osdemos.threads_sema:binary_main"
osdemos-dining-deadlock = "osdemos.threads_sema:dining_deadlock_main"
osdemos-dining-deadlock-print = "osdemos.threads_sema:dining_deadlock_print_main"
osdemos-dining-no-deadlock = "osdemos.threads_sema:dining_no_deadlock_main"
osdemos-dining-no-deadlock-print = "osdemos.threads_sema:dining_no_deadlock_print_main"
osdemos-sema-join = "osdemos.threads_sema:join_main"
osdemos-producer-consumer = "osdemos.threads_sema:producer_consumer_main"
osdemos-rwlock = "osdemos.threads_sema:rwlock_main"
osdemos-throttle = "osdemos.threads_sema:throttle_main"
osdemos-zemaphore = "osdemos.threads_sema:zemaphore_main"
osdemos-cas = "osdemos.cas:main"
osdemos-p1 = "osdemos.process:p1_main"
osdemos-p2 = "osdemos.process:p2_main"
osdemos-p3 = "osdemos.process:p3_main"
osdemos-p4 = "osdemos.process:p4_main"
osdemos-hw-p1 = "osdemos.process:hw_p1_main"
osdemos-hw-p2 = "osdemos.process:hw_p2_main"
osdemos-hw-p3 = "osdemos.process:hw_p3_main"
osdemos-hw-p7 = "osdemos.process:hw_p7_main"
osdemos-hw-p8 = "osdemos.process:hw_p8_main"

[tool.hatch.build.targets.wheel]
packages = ["osdemos"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
