# athread

A small thread pool that hands tasks out to worker threads.

- **Core workers** are created as tasks arrive, up to `core_size`. They stay
  alive until the pool is terminated.
- **Seasonal workers** are created once the core is full, up to `max_size`
  workers in total (no limit when `max_size` is negative). A seasonal worker
  that waits idle for `alive_time` seconds exits on its own.
- A new worker is only created when no existing worker is waiting for a task.
- A pool can be created so that it runs nothing until `start()` is called.

## Installation

```
pip install .
```

## Usage

### ThreadPool

```python
from athread.pool import ThreadPool

pool = ThreadPool(1, 2)           # one core worker, at most two in total
pool.push(lambda: print("hello"))
pool.terminate()                  # stop taking tasks, then wait for the workers
```

`ThreadPool(core_size=2, max_size=None, alive_time=60.0,
wait_for_signal_start=False)`: when `max_size` is `None` it is the number of
CPUs.

`push` takes either a zero-argument callable or a `Runnable` instance; anything
else raises `TypeError`. It returns `False` once the pool no longer accepts
tasks. An exception raised by a task is logged and the worker carries on.

Tasks still queued when `terminate()` is called are dropped; tasks already
running finish. `terminate(also_wait=False)` signals the workers without
joining them; `wait()` joins them later. `detach()` stops tracking the current
worker threads, so `wait()` no longer joins them.

A pool is also a context manager: leaving the `with` block calls
`terminate()`. Pools cannot be copied; `copy.copy` and `copy.deepcopy` raise
`TypeError`.

### Runnable tasks

```python
from athread.pool import Runnable, ThreadPool

class Greet(Runnable):
    def __init__(self, name):
        self.name = name

    def run(self):
        print("hello,", self.name)

with ThreadPool(2) as pool:
    pool.emplace(Greet, "world")  # builds Greet("world") and pushes it
```

### ThreadPoolFixed

A fixed pool of at most `core_size` workers waits for `start()` before it
runs anything, and its workers exit as soon as the queue is empty:

```python
from athread.pool import ThreadPoolFixed

pool = ThreadPoolFixed(2)
pool.push(lambda: print("task 1"))
pool.push(lambda: print("task 2"))
pool.start()
pool.wait()
```

Tasks can still be pushed after `start()` for as long as the pool has
workers left; once every worker has exited, `push` returns `False`.

### Inspecting a pool

- `is_idle()` is true when every worker is waiting for a task.
- `executable()` tells whether the pool accepts new tasks.
- `clean_complete_workers()` joins and removes workers that have exited.

Worker states are given by `WorkerStatus`: `NOT_AVAILABLE`, `WAITING_TASK`,
`WAITING_START`, `BUSY` and `END`.

Worker activity is logged at debug level on the `athread.pool` logger.

## Samples

`athread.samples` holds three small programs:

- `auto_shutdown()`: two tasks on a `ThreadPoolFixed` that shuts itself down;
  returns the lines the tasks printed.
- `lambda_sample()`: a closure run on a `ThreadPoolFixed`; returns its line.
- `simple()`: two `RunnableSample` tasks pushed a second apart to a pool with
  one core and one seasonal worker, which is terminated part way through;
  returns the two samples.

Run one from the command line (the default is `simple`):

```
athread-samples [auto_shutdown | lambda | simple]
```