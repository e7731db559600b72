"""Thread pool with persistent core workers and short-lived seasonal workers."""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from typing import Any, Callable, Union

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 2
DEFAULT_ALIVE_TIME = 60.0


class WorkerStatus(Enum):
    """Lifecycle states of a worker."""

    NOT_AVAILABLE = 0
    WAITING_TASK = 1
    WAITING_START = 2
    BUSY = 3
    END = 4


class Runnable(ABC):
    """A unit of work that a pool can execute."""

    @abstractmethod
    def run(self) -> None:
        """Do the work."""


class _CallableRunnable(Runnable):
    def __init__(self, fn: Callable[[], Any]) -> None:
        self._fn = fn

    def run(self) -> None:
        self._fn()


Task = Union[Runnable, Callable[[], Any]]


class Worker:
    """Pulls tasks from a pool's queue and runs them on its own thread."""

    def __init__(self, worker_id: int) -> None:
        self.id = worker_id
        self.status = WorkerStatus.NOT_AVAILABLE
        logger.debug("create worker %d", worker_id)

    def work(self, pool: ThreadPool) -> None:
        """Run tasks until the pool is terminated."""
        self.wait_for_start_signal(pool)
        condition = pool._condition
        while True:
            with condition:
                self.status = WorkerStatus.WAITING_TASK
                logger.debug("worker %d is waiting for new task", self.id)
                condition.wait_for(lambda: pool._terminated or bool(pool._queue))
                if pool._terminated:
                    break
                task = pool._queue.popleft()
            logger.debug("worker %d is getting a task", self.id)
            self._execute(task)
        logger.debug("worker %d is exited", self.id)
        self.status = WorkerStatus.END

    def work_for(self, alive_time: float, pool: ThreadPool) -> None:
        """Run tasks until terminated or idle for longer than ``alive_time`` seconds."""
        self.wait_for_start_signal(pool)
        condition = pool._condition
        while True:
            with condition:
                self.status = WorkerStatus.WAITING_TASK
                logger.debug("s-worker %d is waiting for new task", self.id)
                condition.wait_for(
                    lambda: pool._terminated or bool(pool._queue), timeout=alive_time
                )
                if pool._terminated or not pool._queue:
                    break
                task = pool._queue.popleft()
            logger.debug("s-worker %d is getting a task", self.id)
            self._execute(task)
        logger.debug("s-worker %d is exited", self.id)
        self.status = WorkerStatus.END

    def wait_for_start_signal(self, pool: ThreadPool) -> None:
        """Block until the pool has been started."""
        with pool._condition:
            self.status = WorkerStatus.WAITING_START
            logger.debug("worker %d is waiting for start signal", self.id)
            pool._condition.wait_for(lambda: not pool._waiting_for_start)

    def _execute(self, task: Runnable) -> None:
        self.status = WorkerStatus.BUSY
        try:
            task.run()
        except Exception:
            logger.exception("worker %d: task raised", self.id)


class ThreadPool:
    """Distributes tasks over a bounded set of worker threads.

    Up to ``core_size`` workers live until the pool is terminated; workers
    created beyond that exit after ``alive_time`` seconds without work. The
    total never exceeds ``max_size`` unless ``max_size`` is negative.
    """

    def __init__(
        self,
        core_size: int = DEFAULT_POOL_SIZE,
        max_size: int | None = None,
        alive_time: float = DEFAULT_ALIVE_TIME,
        wait_for_signal_start: bool = False,
    ) -> None:
        self.core_size = core_size
        self.max_size = (os.cpu_count() or 1) if max_size is None else max_size
        self.alive_time = alive_time
        self._queue: deque[Runnable] = deque()
        self._workers: list[Worker] = []
        self._threads: list[threading.Thread] = []
        self._detached: set[threading.Thread] = set()
        self._registry = threading.RLock()
        self._condition = threading.Condition()
        self._terminated = False
        self._waiting_for_start = wait_for_signal_start

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.terminate()

    def __copy__(self) -> ThreadPool:
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __deepcopy__(self, memo: dict) -> ThreadPool:
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def is_idle(self) -> bool:
        """True when every worker is waiting for a new task."""
        with self._registry:
            return all(w.status is WorkerStatus.WAITING_TASK for w in self._workers)

    def push(self, task: Task) -> bool:
        """Queue a runnable or a zero-argument callable; False if the pool no longer accepts work."""
        if isinstance(task, Runnable):
            runnable = task
        elif callable(task):
            runnable = _CallableRunnable(task)
        else:
            raise TypeError(f"task must be a Runnable or callable, not {type(task).__name__}")

        if not self.executable():
            return False

        with self._registry:
            self.clean_complete_workers()
            if self.max_size < 0 or len(self._workers) < self.max_size:
                if not any(w.status is WorkerStatus.WAITING_TASK for w in self._workers):
                    if len(self._workers) >= self.core_size:
                        self._create_seasonal_worker(1, self.alive_time)
                    else:
                        self._create_worker(1)

        with self._condition:
            self._queue.append(runnable)
            self._condition.notify()
        return True

    def emplace(self, runnable_type: type[Runnable], *args: Any, **kwargs: Any) -> bool:
        """Construct a runnable from the given arguments and push it."""
        return self.push(runnable_type(*args, **kwargs))

    def start(self) -> None:
        """Let workers begin taking tasks from the queue."""
        with self._condition:
            self._waiting_for_start = False
            self._terminated = False
            self._condition.notify_all()

    def wait(self) -> None:
        """Block until every attached worker thread has exited."""
        self.clean_complete_workers()
        with self._registry:
            threads = [t for t in self._threads if t not in self._detached]
        current = threading.current_thread()
        for thread in threads:
            if thread is not current:
                thread.join()

    def terminate(self, also_wait: bool = True) -> None:
        """Stop handing out queued tasks; running tasks finish normally."""
        with self._condition:
            self._terminated = True
            self._condition.notify_all()
        if also_wait:
            self.wait()

    def executable(self) -> bool:
        """True if the pool accepts new tasks."""
        return not self._terminated

    def detach(self) -> None:
        """Stop tracking the current worker threads for :meth:`wait`."""
        self.clean_complete_workers()
        with self._registry:
            self._detached.update(self._threads)

    def clean_complete_workers(self) -> None:
        """Forget workers that have exited."""
        current = threading.current_thread()
        with self._registry:
            kept: list[tuple[Worker, threading.Thread]] = []
            for worker, thread in zip(self._workers, self._threads):
                if worker.status is WorkerStatus.END:
                    if thread not in self._detached and thread is not current:
                        thread.join()
                    self._detached.discard(thread)
                else:
                    kept.append((worker, thread))
            self._workers = [w for w, _ in kept]
            self._threads = [t for _, t in kept]

    def _create_worker(self, count: int) -> None:
        for _ in range(count):
            worker = Worker(len(self._workers))
            self._spawn(worker, worker.work, (self,))

    def _create_seasonal_worker(self, count: int, alive_time: float) -> None:
        for _ in range(count):
            worker = Worker(len(self._workers))
            self._spawn(worker, worker.work_for, (alive_time, self))

    def _spawn(self, worker: Worker, target: Callable[..., None], args: tuple) -> None:
        thread = threading.Thread(
            target=target, args=args, name=f"athread-worker-{worker.id}", daemon=True
        )
        self._workers.append(worker)
        self._threads.append(thread)
        thread.start()


class ThreadPoolFixed(ThreadPool):
    """A pool of at most ``core_size`` workers that runs only after :meth:`start`.

    Workers exit as soon as the queue is empty, so the pool shuts itself down
    once its work is done.
    """

    def __init__(self, core_size: int) -> None:
        super().__init__(core_size, core_size, 0.0, True)

    def executable(self) -> bool:
        """False once terminated or once every worker has gone."""
        if self._terminated:
            return False
        if self._waiting_for_start:
            return True
        with self._registry:
            return len(self._workers) > 0

    def _create_worker(self, count: int) -> None:
        self._create_seasonal_worker(count, 0.0)