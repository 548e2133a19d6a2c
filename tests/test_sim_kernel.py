# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_sim_kernel.py

"""Discrete-tick scheduler."""

from __future__ import annotations

import asyncio

import pytest

from axis_pump.dv.sim_kernel import SimKernel


def test_run_counts_edges_and_orders_hooks() -> None:
    seen: list[tuple[str, int]] = []
    ticks: list[int] = []

    async def main() -> int:
        k = SimKernel()
        k.on_edge(lambda c: seen.append(("a", c)))
        k.on_edge(lambda c: seen.append(("b", c)))

        async def proc() -> None:
            while True:
                await k.tick()
                ticks.append(k.cycle)

        k.start(proc(), "proc")
        await k.run(3)
        k.stop()
        return k.cycle

    assert asyncio.run(main()) == 3
    assert ticks == [1, 2, 3]
    assert seen == [("a", 0), ("b", 0), ("a", 1), ("b", 1), ("a", 2), ("b", 2)]


def test_hooks_see_lines_settled_before_the_edge() -> None:
    line = {"v": 0}
    sampled: list[int] = []

    async def main() -> None:
        k = SimKernel()
        k.on_edge(lambda c: sampled.append(line["v"]))

        async def writer() -> None:
            for v in (1, 2, 3):
                line["v"] = v
                # a second write before the edge must hide the first
                await asyncio.sleep(0)
                line["v"] = v * 10
                await k.tick()

        k.start(writer(), "writer")
        await k.run(3)
        k.stop()

    asyncio.run(main())
    assert sampled == [10, 20, 30]


def test_event_wakes_waiter_in_same_cycle() -> None:
    woke: list[int] = []

    async def main() -> bool:
        k = SimKernel()
        ev = k.event("go")

        async def waiter() -> None:
            await ev.wait()
            woke.append(k.cycle)

        async def setter() -> None:
            await k.tick()
            await k.tick()
            ev.set()

        k.start(waiter(), "waiter")
        k.start(setter(), "setter")
        await k.run(4)
        done = k.task("waiter").done() and k.task("setter").done()
        k.stop()
        return done and ev.is_set()

    assert asyncio.run(main())
    assert woke == [2]


def test_event_set_before_wait_does_not_block() -> None:
    async def main() -> bool:
        k = SimKernel()
        ev = k.event()
        ev.set()

        async def waiter() -> None:
            await ev.wait()

        k.start(waiter(), "waiter")
        await k.run(0)
        ev.clear()
        return k.task("waiter").done() and not ev.is_set()

    assert asyncio.run(main())


def test_process_exception_ends_the_run() -> None:
    async def main() -> None:
        k = SimKernel()

        async def bad() -> None:
            await k.tick()
            raise ValueError("boom")

        k.start(bad(), "bad")
        await k.run(5)

    with pytest.raises(ValueError, match="boom"):
        asyncio.run(main())


def test_busy_process_is_reported() -> None:
    async def main() -> None:
        k = SimKernel(settle_limit=50)

        async def spin() -> None:
            while True:
                await asyncio.sleep(0)

        k.start(spin(), "spin")
        await k.run(1)

    with pytest.raises(RuntimeError, match="did not settle"):
        asyncio.run(main())


def test_run_until_reports_timeout() -> None:
    async def main() -> tuple[bool, int, bool]:
        k = SimKernel()
        never = await k.run_until(lambda: False, 5)
        at = k.cycle
        soon = await k.run_until(lambda: k.cycle >= 7, 100)
        return never, at, soon

    assert asyncio.run(main()) == (False, 5, True)


def test_duplicate_names_and_stopped_kernel() -> None:
    async def idle() -> None:
        pass

    async def main() -> None:
        k = SimKernel()
        k.start(idle(), "p")
        coro = idle()
        with pytest.raises(ValueError, match="already started"):
            k.start(coro, "p")
        coro.close()
        await k.run(1)
        k.stop()
        with pytest.raises(RuntimeError, match="stopped"):
            await k.step()

    asyncio.run(main())


def test_stop_leaves_no_runnable_processes() -> None:
    async def main() -> int:
        k = SimKernel()

        async def proc() -> None:
            while True:
                await k.tick()

        for i in range(3):
            k.start(proc(), f"p{i}")
        await k.run(2)
        k.stop()
        # let the cancellations unwind
        for _ in range(3):
            await asyncio.sleep(0)
        assert all(t.done() for t in (k.task(f"p{i}") for i in range(3)))
        return k._runnable  # pylint: disable=protected-access

    assert asyncio.run(main()) == 0
