# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/sim_kernel.py

"""Deterministic discrete-tick scheduler on top of asyncio.

This is the software stand-in for a simulator clock. Processes are coroutines
started with ``start()``. They block only on ``tick()`` or on events from
``event()``, which lets the kernel know exactly when every process is
blocked again ("settled"). One cycle of ``run()`` is:

    1. call every edge hook (sampling happens here, nothing else runs)
    2. advance ``cycle`` and wake every process waiting in ``tick()``
    3. let processes run until all of them are blocked again

Between two edges processes therefore see a stable snapshot of the previous
edge and may change lines freely; observers only ever see settled values.

A process that raises ends the run: the exception is re-raised from
``run()`` / ``run_until()``.

Example:
    >>> async def main():
    ...     k = SimKernel()
    ...     async def proc():
    ...         while True:
    ...             await k.tick()
    ...     k.start(proc(), "proc")
    ...     await k.run(10)
    ...     k.stop()
    ...     return k.cycle
    >>> asyncio.run(main())
    10
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine

from . import utils_dv

EdgeHook = Callable[[int], None]


class SimEvent:
    """Level-sensitive event whose waiters are tracked by the kernel."""

    def __init__(self, kernel: SimKernel, name: str = "") -> None:
        self._kernel = kernel
        self.name = name
        self._set: bool = False
        self._waiters: list[asyncio.Future[None]] = []

    def is_set(self) -> bool:
        """Return True while the event is set."""
        return self._set

    def set(self) -> None:
        """Set the event and wake every waiter."""
        self._set = True
        waiters, self._waiters = self._waiters, []
        for fut in waiters:
            self._kernel._wake(fut)

    def clear(self) -> None:
        """Clear the event; later waiters block until the next set()."""
        self._set = False

    async def wait(self) -> None:
        """Return immediately if set, else block until set()."""
        if self._set:
            return
        fut = self._kernel._block()
        self._waiters.append(fut)
        await fut


class SimKernel:
    """Cycle-based cooperative scheduler for pump processes.

    Attributes:
        cycle: Number of edges run so far.
        settle_limit: Event-loop passes allowed for one settle before the run
            is declared stuck.
    """

    def __init__(self, name: str = "kernel", settle_limit: int = 100_000) -> None:
        self.logger: logging.Logger = utils_dv.component_logger(name)
        self.cycle: int = 0
        self.settle_limit: int = settle_limit
        self._runnable: int = 0
        self._tick_waiters: list[asyncio.Future[None]] = []
        self._edge_hooks: list[EdgeHook] = []
        self._tasks: dict[str, asyncio.Task[Any]] = {}
        self._stopped: bool = False

    # -- process side -----------------------------------------------------

    def start(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task[Any]:
        """Register ``coro`` as a process; it first runs at the next settle."""
        if name in self._tasks:
            raise ValueError(f"process {name!r} already started")
        self._runnable += 1
        task = asyncio.get_running_loop().create_task(self._wrap(coro), name=name)
        self._tasks[name] = task
        self.logger.debug("start %s", name)
        return task

    async def _wrap(self, coro: Awaitable[Any]) -> Any:
        try:
            return await coro
        finally:
            if not self._stopped:
                self._runnable -= 1

    def event(self, name: str = "") -> SimEvent:
        """Return a new event bound to this kernel."""
        return SimEvent(self, name)

    async def tick(self) -> None:
        """Block the calling process until the next edge."""
        fut = self._block()
        self._tick_waiters.append(fut)
        await fut

    def on_edge(self, hook: EdgeHook) -> None:
        """Call ``hook(cycle)`` at every edge, before any process resumes."""
        self._edge_hooks.append(hook)

    def _block(self) -> asyncio.Future[None]:
        self._runnable -= 1
        return asyncio.get_running_loop().create_future()

    def _wake(self, fut: asyncio.Future[None]) -> None:
        if not fut.done():
            self._runnable += 1
            fut.set_result(None)

    # -- orchestrator side ------------------------------------------------

    def task(self, name: str) -> asyncio.Task[Any]:
        """Return the task of a started process."""
        return self._tasks[name]

    async def settle(self) -> None:
        """Let every process run until all are blocked, then check for errors."""
        passes = 0
        while self._runnable > 0:
            passes += 1
            if passes > self.settle_limit:
                raise RuntimeError(
                    f"processes did not settle at cycle {self.cycle} "
                    f"({self._runnable} still runnable)"
                )
            await asyncio.sleep(0)
        self._raise_failures()

    def _raise_failures(self) -> None:
        for name, task in self._tasks.items():
            if task.done() and not task.cancelled():
                exc = task.exception()
                if exc is not None:
                    self.logger.error("process %s failed: %r", name, exc)
                    raise exc

    async def step(self) -> None:
        """Run one edge."""
        if self._stopped:
            raise RuntimeError("kernel is stopped")
        for hook in self._edge_hooks:
            hook(self.cycle)
        self.cycle += 1
        waiters, self._tick_waiters = self._tick_waiters, []
        for fut in waiters:
            self._wake(fut)
        await self.settle()

    async def run(self, cycles: int) -> None:
        """Run ``cycles`` edges."""
        await self.settle()
        for _ in range(cycles):
            await self.step()

    async def run_until(self, done: Callable[[], bool], max_cycles: int) -> bool:
        """Run edges until ``done()`` is true; False if ``max_cycles`` ran out."""
        await self.settle()
        for _ in range(max_cycles):
            if done():
                return True
            await self.step()
        return done()

    def stop(self) -> None:
        """Stop scheduling: cancel every process still running."""
        self._stopped = True
        self._runnable = 0
        for task in self._tasks.values():
            task.cancel()
        self._tick_waiters.clear()
        self.logger.debug("stop at cycle %d", self.cycle)
