"""One-shot signal a window resolves when it has closed."""

from concurrent.futures import Future
from typing import Callable, Optional


class CloseSignal:
    """Completion signal shared between a window and whoever opened it.

    The window calls set() once it is gone (after any save it performs on
    close). Callers either register a callback or block in wait() from a
    thread other than the Tk thread.
    """

    def __init__(self):
        self._future: Future = Future()

    def set(self, result: bool = True) -> None:
        """Resolve the signal. Calling it again has no effect."""
        if not self._future.done():
            self._future.set_result(result)

    def is_set(self) -> bool:
        return self._future.done()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the signal is resolved.

        Raises:
            concurrent.futures.TimeoutError: If timeout expires first
        """
        return self._future.result(timeout=timeout)

    def add_callback(self, callback: Callable[[bool], None]) -> None:
        """Run callback with the result once resolved (now, if it already is)."""
        self._future.add_done_callback(lambda future: callback(future.result()))
