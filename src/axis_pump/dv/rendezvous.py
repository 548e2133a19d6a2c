# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/rendezvous.py

"""Single-slot blocking handoff between a generator and a driver."""

from __future__ import annotations

from typing import Generic, Protocol, TypeVar

from .sim_kernel import SimKernel

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class ItemSource(Protocol[T_co]):
    """What a driver pulls items from (pyuvm's seq_item_port fits too)."""

    async def get_next_item(self) -> T_co:
        """Block until an item is offered, then take it."""

    def item_done(self) -> None:
        """Signal that the item taken last has been fully driven."""


class Rendezvous(Generic[T]):
    """Capacity-1 channel with a completion handshake.

    This is the sequencer's ``start_item``/``finish_item`` and the driver's
    ``get_next_item``/``item_done`` collapsed into one object:

    Producer side:
        ``await put(item)`` returns once the consumer has taken ``item``;
        ``await wait_item_done()`` returns once the consumer called
        ``item_done()`` for it. A new ``put`` before that is an error.

    Consumer side:
        ``await get_next_item()`` blocks until an item is offered;
        ``item_done()`` completes it.

    Example:
        >>> chan = Rendezvous(kernel)
        >>> # generator                       # driver
        >>> await chan.put(tr)                # tr = await chan.get_next_item()
        >>> await chan.wait_item_done()       # chan.item_done()
    """

    def __init__(self, kernel: SimKernel, name: str = "chan") -> None:
        self.name = name
        self._slot: T | None = None
        self._in_flight: T | None = None
        self._busy: bool = False
        self._offered = kernel.event(f"{name}.offered")
        self._taken = kernel.event(f"{name}.taken")
        self._done = kernel.event(f"{name}.done")

    @property
    def busy(self) -> bool:
        """True from ``put()`` until the matching ``item_done()``."""
        return self._busy

    async def put(self, item: T) -> None:
        """Offer ``item`` and block until the consumer takes it."""
        if self._busy:
            raise RuntimeError(
                f"{self.name}: put() while a previous item is not done"
            )
        self._busy = True
        self._slot = item
        self._taken.clear()
        self._done.clear()
        self._offered.set()
        await self._taken.wait()

    async def wait_item_done(self) -> None:
        """Block until the consumer completes the item given to ``put()``."""
        await self._done.wait()

    async def send(self, item: T) -> None:
        """``put()`` then ``wait_item_done()``."""
        await self.put(item)
        await self.wait_item_done()

    async def get_next_item(self) -> T:
        """Block until an item is offered and take it."""
        if self._in_flight is not None:
            raise RuntimeError(
                f"{self.name}: get_next_item() called twice without item_done()"
            )
        await self._offered.wait()
        self._offered.clear()
        item = self._slot
        assert item is not None, "offered event set without an item"
        self._slot = None
        self._in_flight = item
        self._taken.set()
        return item

    def item_done(self) -> None:
        """Complete the item taken by the last ``get_next_item()``."""
        if self._in_flight is None:
            raise RuntimeError(f"{self.name}: item_done() without get_next_item()")
        self._in_flight = None
        self._busy = False
        self._done.set()
