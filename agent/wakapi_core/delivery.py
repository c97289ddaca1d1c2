"""
Cooperative delivery queue — non-blocking sends, observed by polling.

The host gives us one callback per tick and nothing else: no blocking
waits, no event loop. Network work runs on a short-lived daemon thread
(BackgroundRequest); the tick only checks whether it has finished.

  enqueue(op, cb)  → append PendingRequest (any thread)
  tick()           → pop ONE request; not done → back to the tail,
                     done → cb(op) on the tick thread, exactly once

The lock guards the deque mutation only. It is never held while a
callback runs.
"""

import threading
from collections import deque

from .config import log


class PendingRequest:
    """A started operation plus the callback to fire when it is done."""

    __slots__ = ("operation", "on_complete", "fired")

    def __init__(self, operation, on_complete):
        self.operation = operation
        self.on_complete = on_complete
        self.fired = False

    def poll(self) -> bool:
        """True once the callback has fired; False while still pending."""
        if self.fired:
            return True
        if not self.operation.done():
            return False
        self.fired = True
        self.on_complete(self.operation)
        return True


class DeliveryQueue:
    def __init__(self):
        self._requests = deque()
        self._lock = threading.Lock()

    def enqueue(self, operation, on_complete):
        request = PendingRequest(operation, on_complete)
        with self._lock:
            self._requests.append(request)
        return request

    def _pop(self):
        with self._lock:
            if not self._requests:
                return None
            return self._requests.popleft()

    def tick(self):
        """Advance at most one request. Returns the request handled, or None."""
        request = self._pop()
        if request is None:
            return None

        try:
            finished = request.poll()
        except Exception as e:
            # The callback already counts as fired; don't let it reach the host.
            log.error("Delivery callback error: %s", e, exc_info=True)
            return request

        if not finished:
            with self._lock:
                self._requests.append(request)
        return request

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._requests)

    def drain(self, max_ticks, wait=None):
        """
        Tick until empty or max_ticks is used up. `wait` runs between
        ticks (e.g. a short sleep on shutdown). Returns requests left.
        """
        for _ in range(max_ticks):
            if not self.pending:
                break
            self.tick()
            if wait is not None:
                wait()
        return self.pending


# ─── Background operation ────────────────────────────────────────

class BackgroundRequest:
    """
    Runs `fn` on a daemon thread. done() flips once it returns or raises;
    the outcome stays on `result` / `error` for the completion callback.
    """

    def __init__(self, fn, name="wakapi-request"):
        self._fn = fn
        self._done = threading.Event()
        self.result = None
        self.error = None
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self):
        self._thread.start()
        return self

    def _run(self):
        try:
            self.result = self._fn()
        except Exception as e:
            self.error = e
        finally:
            self._done.set()

    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout=None) -> bool:
        return self._done.wait(timeout)
