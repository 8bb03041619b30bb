"""Runnable demonstrations of processes, threads, synchronisation, scheduling, UDP messaging and persistence."""

__version__ = "0.1.0"