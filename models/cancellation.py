"""Cancellation token checked at every blocking step of a generation request"""

import threading
import time
from typing import Optional

from models.errors import GenerationCancelled


class CancelToken:
    """
    Cooperative cancellation with an optional deadline.

    The UI (or CLI) keeps a reference and calls cancel() when the request is
    superseded; the pipelines call raise_if_cancelled() before each document
    open, page read, render, OCR call and network request.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without one"""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self, step: str = "") -> None:
        if self.cancelled:
            raise GenerationCancelled(f"Generation was cancelled{f' during {step}' if step else ''}.")
        if self.expired:
            raise GenerationCancelled(f"Generation timed out{f' during {step}' if step else ''}.")


def check(cancel: Optional[CancelToken], step: str = "") -> None:
    """raise_if_cancelled() for an optional token"""
    if cancel is not None:
        cancel.raise_if_cancelled(step)
