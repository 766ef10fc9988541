"""
Cancellation of in-flight uploads.

A CancellationToken is fired by the user (Ctrl+C) and cancels whatever was
registered with it, typically the asyncio task running the HTTP request.
"""
import asyncio
import signal
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List

from ..exceptions import UploadCancelledError
from ..logging import get_logger

logger = get_logger(__name__)


class CancellationToken:
    """
    One-shot cancellation signal.

    Callbacks registered before cancel() run when it fires; callbacks
    registered afterwards run immediately.
    """

    def __init__(self):
        self._cancelled = False
        self._callbacks: List[Callable[[], object]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def register(self, callback: Callable[[], object]) -> None:
        if self._cancelled:
            callback()
            return
        self._callbacks.append(callback)

    def unregister(self, callback: Callable[[], object]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def cancel(self) -> None:
        """Fire the token. Later calls are ignored."""
        if self._cancelled:
            return
        self._cancelled = True
        logger.info("Cancellation requested")
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise UploadCancelledError("Upload cancelled by user")


@contextmanager
def cancel_on_interrupt(token: CancellationToken) -> Iterator[CancellationToken]:
    """
    Fire token on SIGINT while the block runs.

    Must be entered from a coroutine running on the main thread's event loop.
    The previous SIGINT behaviour is restored on exit.
    """
    if threading.current_thread() is not threading.main_thread():
        yield token
        return

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, token.cancel)
    except NotImplementedError:
        # Windows event loops have no add_signal_handler
        previous = signal.signal(
            signal.SIGINT,
            lambda signum, frame: loop.call_soon_threadsafe(token.cancel)
        )
        try:
            yield token
        finally:
            signal.signal(signal.SIGINT, previous)
        return

    try:
        yield token
    finally:
        loop.remove_signal_handler(signal.SIGINT)
