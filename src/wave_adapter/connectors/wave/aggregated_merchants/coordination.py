"""Single-flight coordination for aggregated-merchant auto-creation.

The resolver holds no shared state itself. A caller that runs several
authorizations concurrently can share one :class:`SingleFlight` between them so
that parallel auto-creations for the same profile collapse into one remote call.
"""

import threading
from typing import Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class _Call(Generic[T]):
    def __init__(self):
        self.done = threading.Event()
        self.result: Optional[T] = None
        self.error: Optional[Exception] = None


class SingleFlight(Generic[T]):
    """At most one in-flight call per key; concurrent callers get the leader's result."""

    def __init__(self):
        self._lock = threading.Lock()
        self._calls: Dict[str, _Call[T]] = {}

    def do(self, key: str, fn: Callable[[], T]) -> T:
        with self._lock:
            call = self._calls.get(key)
            leader = call is None
            if leader:
                call = _Call()
                self._calls[key] = call

        if not leader:
            call.done.wait()
            if call.error is not None:
                raise call.error
            return call.result

        try:
            call.result = fn()
        except Exception as e:
            call.error = e
            raise
        finally:
            with self._lock:
                del self._calls[key]
            call.done.set()
        return call.result

    def in_flight(self, key: str) -> bool:
        with self._lock:
            return key in self._calls
