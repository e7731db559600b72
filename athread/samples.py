"""Small demonstration programs for the thread pool."""

from __future__ import annotations

import argparse
import random
import threading
import time
from typing import Callable

from .pool import Runnable, ThreadPool, ThreadPoolFixed

TICK = 1.0

_print_lock = threading.Lock()


def _say(text: str, record: list[str] | None = None) -> None:
    with _print_lock:
        print(f">{text}", flush=True)
        if record is not None:
            record.append(text)


class RunnableSample(Runnable):
    """Prints a line and sleeps for one tick, ``loop`` times."""

    def __init__(self, name: str, loop: int | None = None) -> None:
        self.name = name
        self.loop = random.randint(2, 11) if loop is None else loop
        self.lines: list[str] = []
        _say(f"{name} loop {self.loop}")

    def run(self) -> None:
        for i in range(self.loop):
            _say(f"{self.name} running {i}", self.lines)
            time.sleep(TICK)


def auto_shutdown() -> list[str]:
    """Run two tasks on a fixed pool that shuts itself down; return their lines."""
    lines: list[str] = []
    pool = ThreadPoolFixed(2)

    def make_task(number: int) -> Callable[[], None]:
        def task() -> None:
            _say(f"auto_shutdown: run taks {number}", lines)
            time.sleep(TICK)
            _say(f"auto_shutdown: end taks {number}", lines)

        return task

    for number in (1, 2):
        pool.push(make_task(number))
    pool.start()
    pool.wait()
    return lines


def lambda_sample() -> list[str]:
    """Run a closure on a fixed pool; return the line it printed."""
    lines: list[str] = []
    pool = ThreadPoolFixed(2)
    a = 4
    pool.push(lambda: _say(f"lambda function: {a}", lines))
    pool.start()
    pool.wait()
    return lines


def simple() -> list[RunnableSample]:
    """Push two samples a tick apart, then terminate; return the samples."""
    pool = ThreadPool(1, 2)
    first = RunnableSample("task-1")
    pool.push(first)
    _say(f"main thread sleep for {TICK:g}s")
    time.sleep(TICK)
    second = RunnableSample("task-2")
    pool.push(second)

    time.sleep(TICK)
    pool.terminate()

    pool.wait()
    return [first, second]


_SAMPLES: dict[str, Callable[[], object]] = {
    "auto_shutdown": auto_shutdown,
    "lambda": lambda_sample,
    "simple": simple,
}


def main(argv: list[str] | None = None) -> int:
    """Run one of the demonstration programs."""
    parser = argparse.ArgumentParser(prog="athread", description="Thread pool demonstrations.")
    parser.add_argument("sample", nargs="?", choices=sorted(_SAMPLES), default="simple")
    args = parser.parse_args(argv)
    _SAMPLES[args.sample]()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())