"""Cancellation and deadlines for a running evaluation.

A `Context` is handed to the evaluator together with the program. The
evaluator calls `Context.check` before every node, which raises
`Cancelled` once `cancel()` has been called (from any thread) or
`DeadlineExceeded` once the monotonic deadline has passed.
"""

from __future__ import annotations

import threading
import time
from typing import Optional

from .errors import Cancelled, DeadlineExceeded, EvaluationInterrupted


class Context:
    def __init__(self, deadline: Optional[float] = None, parent: Optional['Context'] = None):
        self.deadline = deadline
        self.parent = parent
        self._cancelled = threading.Event()
        if parent is not None and parent.deadline is not None:
            if self.deadline is None or parent.deadline < self.deadline:
                self.deadline = parent.deadline

    @classmethod
    def background(cls) -> 'Context':
        """A context that is never cancelled and has no deadline."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float, parent: Optional['Context'] = None) -> 'Context':
        return cls(deadline=time.monotonic() + seconds, parent=parent)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self.parent is not None and self.parent.cancelled

    def remaining(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def err(self) -> Optional[EvaluationInterrupted]:
        """Return the reason this context is done, or None while it is live."""
        if self.cancelled:
            return Cancelled()
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return DeadlineExceeded()
        return None

    def check(self) -> None:
        err = self.err()
        if err is not None:
            raise err
