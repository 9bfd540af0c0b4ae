# src/csv2json/engine/channel.py
"""Bounded record channel between the parser and writer threads.

The channel is a single-producer/single-consumer FIFO backed by a bounded
queue.Queue. End of stream is an explicit close() by the producer, which
enqueues a sentinel behind any pending records, so the consumer sees
"closed" only after everything sent before it.

Backpressure:
    send() blocks while the queue is full. With the default capacity of 1
    at most one record waits between the stages, whatever the input size.

Abort:
    A fatal error on either side calls abort(). Blocked send()/receive()
    calls poll the abort flag between bounded waits, so neither stage can
    be left waiting on a peer that has died.

Thread Safety:
    send()/close() are called from the producer thread only, receive()
    from the consumer thread only. abort() may be called from any thread.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterator
from typing import cast

import structlog

from csv2json.contracts.errors import ChannelAbortedError, ChannelClosedError
from csv2json.contracts.records import Record

logger = structlog.get_logger(__name__)

# End-of-stream marker, enqueued by close()
_CLOSED = object()

# Upper bound on a single blocking wait before the abort flag is re-checked
_POLL_INTERVAL_SECONDS = 0.05


class RecordChannel:
    """Ordered hand-off of records from one producer to one consumer.

    Example:
        channel = RecordChannel(capacity=1)

        # producer thread
        for record in records:
            channel.send(record)
        channel.close()

        # consumer thread
        for record in channel:
            handle(record)
    """

    def __init__(self, capacity: int = 1) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._queue: queue.Queue[Record | object] = queue.Queue(maxsize=capacity)
        self._capacity = capacity
        self._closed = False  # producer side
        self._drained = False  # consumer side
        self._aborted = threading.Event()
        self._abort_reason: BaseException | None = None

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        """True once the producer has called close()."""
        return self._closed

    @property
    def aborted(self) -> bool:
        return self._aborted.is_set()

    def send(self, record: Record) -> None:
        """Hand a record to the consumer, blocking while the channel is full.

        Raises:
            ChannelClosedError: If close() was already called.
            ChannelAbortedError: If the channel was aborted.
        """
        if self._closed:
            raise ChannelClosedError("send on closed channel")
        self._put(record)

    def close(self) -> None:
        """Signal end of stream. Producer-only, exactly once.

        Records sent before close() are still delivered.

        Raises:
            ChannelClosedError: If the channel is already closed.
            ChannelAbortedError: If the channel was aborted.
        """
        if self._closed:
            raise ChannelClosedError("channel already closed")
        self._closed = True
        self._put(_CLOSED)

    def receive(self) -> Record | None:
        """Take the next record, blocking until one is available.

        Returns:
            The next record in send order, or None once the channel is
            closed and every record sent before close() has been received.

        Raises:
            ChannelAbortedError: If the channel was aborted.
        """
        if self._drained:
            return None
        while True:
            self._raise_if_aborted()
            try:
                item = self._queue.get(timeout=_POLL_INTERVAL_SECONDS)
            except queue.Empty:
                continue
            if item is _CLOSED:
                self._drained = True
                return None
            return cast(Record, item)

    def abort(self, reason: BaseException | None = None) -> None:
        """Stop the channel after a fatal error.

        Wakes any blocked send() or receive() with ChannelAbortedError.
        Pending records are discarded. Only the first reason is kept.
        """
        if self._aborted.is_set():
            return
        self._abort_reason = reason
        self._aborted.set()
        logger.debug("channel_aborted", reason=str(reason) if reason is not None else None)

    def __iter__(self) -> Iterator[Record]:
        while (record := self.receive()) is not None:
            yield record

    def _put(self, item: Record | object) -> None:
        while True:
            self._raise_if_aborted()
            try:
                self._queue.put(item, timeout=_POLL_INTERVAL_SECONDS)
                return
            except queue.Full:
                continue

    def _raise_if_aborted(self) -> None:
        if self._aborted.is_set():
            raise ChannelAbortedError(self._abort_reason)
