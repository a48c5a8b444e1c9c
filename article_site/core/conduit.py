"""
Unbuffered handoff channel between pipeline stages.

A Conduit holds at most one item in transit and send() only returns once a
receiver has taken that item, so a producer can never run ahead of its
consumer. Any number of threads may send; items are handed over in the
order they were placed.
"""

from __future__ import annotations

import threading
from typing import Generic, Iterator, TypeVar

from .errors import ConduitClosed

T = TypeVar("T")

_EMPTY = object()


class Conduit(Generic[T]):
    def __init__(self, name: str = "conduit"):
        self.name = name
        self._cond = threading.Condition()
        self._slot: object = _EMPTY
        self._closed = False
        # Tickets pair each send with the receive that takes its item.
        self._placed = 0
        self._taken = 0

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def send(self, item: T) -> None:
        """Hand ``item`` to a receiver, blocking until it has been taken.

        Raises:
            ConduitClosed: If the conduit was closed before the item was placed
        """
        with self._cond:
            while self._slot is not _EMPTY and not self._closed:
                self._cond.wait()
            if self._closed:
                raise ConduitClosed(f"send on closed {self.name}")
            self._slot = item
            self._placed += 1
            ticket = self._placed
            self._cond.notify_all()
            while self._taken < ticket:
                self._cond.wait()

    def receive(self) -> T:
        """Take the next item, blocking until one is sent.

        Raises:
            ConduitClosed: Once the conduit is closed and nothing is in transit
        """
        with self._cond:
            while self._slot is _EMPTY and not self._closed:
                self._cond.wait()
            if self._slot is _EMPTY:
                raise ConduitClosed(f"{self.name} is closed")
            item = self._slot
            self._slot = _EMPTY
            self._taken += 1
            self._cond.notify_all()
            return item  # type: ignore[return-value]

    def close(self) -> None:
        """Mark end-of-stream. Items already placed can still be received."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                item = self.receive()
            except ConduitClosed:
                return
            yield item
