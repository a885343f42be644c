"""
Call context carrying a deadline and a cancellation flag.

Every database call accepts a Context. The connection layer arms the
in-flight statement so that it is cancelled on the server as soon as the
context is cancelled or its deadline passes.
"""

import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from ..errors import OperationCancelledError


class Context:
    """
    Deadline and cancellation token for a single logical request.

    A Context is safe to share between threads. Cancelling it runs every
    registered callback once.
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Create a context.

        Args:
            timeout: Seconds until the deadline, or None for no deadline
        """
        if timeout is not None and timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {timeout}")

        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()
        self._callbacks: List[Callable[[], None]] = []
        self._lock = threading.Lock()

    @classmethod
    def background(cls) -> "Context":
        """A context that is never cancelled and has no deadline."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> "Context":
        return cls(timeout=seconds)

    @property
    def deadline(self) -> Optional[float]:
        """Deadline on the time.monotonic() clock."""
        return self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline (never negative), None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def done(self) -> bool:
        """True once the context is cancelled or past its deadline."""
        return self.cancelled or self.expired()

    def reason(self) -> str:
        if self.cancelled:
            return "context cancelled"
        if self.expired():
            return "context deadline exceeded"
        return ""

    def check(self) -> None:
        """Raise OperationCancelledError if the context is done."""
        if self.done():
            raise OperationCancelledError(self.reason())

    def cancel(self) -> None:
        """Cancel the context and notify registered callbacks."""
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
            callbacks = list(self._callbacks)

        for callback in callbacks:
            callback()

    @contextmanager
    def on_cancel(self, callback: Callable[[], None]) -> Iterator[None]:
        """
        Register a callback for the lifetime of the with-block.

        If the context is already cancelled the callback runs immediately.
        """
        with self._lock:
            already_cancelled = self._cancelled.is_set()
            if not already_cancelled:
                self._callbacks.append(callback)

        if already_cancelled:
            callback()

        try:
            yield
        finally:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)


def ensure_context(ctx: Optional[Context]) -> Context:
    """Return ctx, or a background context when none was given."""
    return ctx if ctx is not None else Context.background()
