"""
Delivery of tokens one at a time to a conduit, racing each hand-off against
a Cancellation.

A conduit is any object with a put(item, timeout) method raising queue.Full
when the item could not be handed off within timeout, such as queue.Queue or
Channel. The coordinator never closes the conduit, that is left to the
caller.
"""

import logging
import queue
import threading
import time
from collections import deque

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.05


class StreamCancelled(Exception):
    """
    Raised by Reader.stream_tokens when its Cancellation is cancelled before
    a token could be handed off.
    """

    pass


class DeadlineExceeded(StreamCancelled):
    """
    Raised by Reader.stream_tokens when the deadline of its Cancellation
    passed before a token could be handed off.
    """

    pass


class ChannelClosed(Exception):
    """
    Raised when putting to a closed Channel, or getting from a closed and
    drained one.
    """

    pass


class Cancellation:
    """
    A cancellation signal with an optional deadline, shared between the
    streaming reader and whoever may cancel it.

    >>> cancellation = Cancellation(timeout=10.0)
    >>> cancellation.cancelled
    False
    >>> cancellation.cancel()
    >>> cancellation.error()
    StreamCancelled('stream cancelled')

    """

    def __init__(self, timeout=None):
        """
        :param timeout: Seconds from now until the deadline, None for no
            deadline.
        """
        self._event = threading.Event()
        self._reason = None
        self.deadline = None if timeout is None else time.monotonic() + timeout

    def cancel(self, reason="stream cancelled"):
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    @property
    def expired(self):
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def cancelled(self):
        return self._event.is_set() or self.expired

    def remaining(self):
        """
        :returns: Seconds until the deadline, None if there is none.
        """
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def wait(self, timeout=None):
        """
        Block until cancelled, the deadline passes or timeout seconds passed.

        :returns: Whether the cancellation fired.
        """
        remaining = self.remaining()
        if remaining is not None and (timeout is None or remaining < timeout):
            timeout = remaining
        self._event.wait(timeout)
        return self.cancelled

    def error(self):
        """
        :returns: The exception describing why the stream was cancelled, or
            None if it was not.
        """
        if self._event.is_set():
            return StreamCancelled(self._reason)
        if self.expired:
            return DeadlineExceeded("stream deadline exceeded")
        return None


class Channel:
    """
    A bounded conduit between one producing and one consuming thread.

    With capacity 0, the channel is unbuffered: put only returns once the
    consumer has taken the item, and an item that was not taken before the
    timeout is withdrawn. With capacity n > 0 it is a fifo of at most n
    items.
    """

    def __init__(self, capacity=0):
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self.closed = False
        self._items = deque()
        self._taken = 0
        self._put = 0
        self._condition = threading.Condition()

    def _has_room(self):
        return self.closed or len(self._items) < max(self.capacity, 1)

    def put(self, item, timeout=None):
        """
        :raises queue.Full: if the item could not be handed off in time.
        :raises ChannelClosed: if the channel is closed.
        """
        end = None if timeout is None else time.monotonic() + timeout
        with self._condition:
            if not self._condition.wait_for(self._has_room, timeout):
                raise queue.Full
            if self.closed:
                raise ChannelClosed("put to closed channel")
            self._items.append(item)
            self._put += 1
            ticket = self._put
            self._condition.notify_all()
            if self.capacity > 0:
                return

            remaining = None if end is None else max(0.0, end - time.monotonic())
            if not self._condition.wait_for(
                lambda: self._taken >= ticket or self.closed, remaining
            ):
                self._items.pop()
                self._put -= 1
                raise queue.Full
            if self._taken < ticket:
                self._items.pop()
                raise ChannelClosed("channel closed before the item was taken")

    def get(self, timeout=None):
        """
        :raises queue.Empty: if no item arrived in time.
        :raises ChannelClosed: if the channel is closed and drained.
        """
        with self._condition:
            if not self._condition.wait_for(
                lambda: self._items or self.closed, timeout
            ):
                raise queue.Empty
            if not self._items:
                raise ChannelClosed("get from closed channel")
            item = self._items.popleft()
            self._taken += 1
            self._condition.notify_all()
            return item

    def close(self):
        with self._condition:
            self.closed = True
            self._condition.notify_all()

    def __iter__(self):
        """
        Yields items until the channel is closed and drained.
        """
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return


class StreamingCoordinator:
    """
    Hands tokens off to a conduit, giving up as soon as the cancellation
    fires. Hand-off is a bounded-wait loop: each attempt waits at most
    poll_interval seconds before the cancellation is checked again.
    """

    def __init__(self, out, cancellation=None, poll_interval=DEFAULT_POLL_INTERVAL):
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        self.out = out
        self.cancellation = cancellation
        self.poll_interval = poll_interval
        self.delivered = 0

    def check_cancelled(self):
        if self.cancellation is None:
            return
        error = self.cancellation.error()
        if error is not None:
            raise error

    def attempt_timeout(self):
        remaining = None if self.cancellation is None else self.cancellation.remaining()
        if remaining is None:
            return self.poll_interval
        return min(self.poll_interval, max(remaining, 0.001))

    def deliver(self, token):
        """
        Block until token is handed off to the conduit.

        :raises StreamCancelled: (or DeadlineExceeded) if the cancellation
            fired first. The token is then discarded.
        """
        while True:
            try:
                self.check_cancelled()
            except StreamCancelled:
                logger.debug(
                    "Stream cancelled after %d tokens, discarding %r",
                    self.delivered,
                    token,
                )
                raise
            try:
                self.out.put(token, timeout=self.attempt_timeout())
            except queue.Full:
                continue
            self.delivered += 1
            return
