from __future__ import annotations

import threading
from typing import Any, Callable, Protocol, TypeVar

T = TypeVar("T")
Poster = Callable[[Callable[[], None]], None]
Cancelled = Callable[[], bool]


class Dispatcher(Protocol):
    def submit(
        self,
        work: Callable[[], T],
        deliver: Callable[[T], None],
        cancelled: Cancelled | None = None,
    ) -> None: ...


class ImmediateDispatcher:
    """Runs work inline; used by the CLI and by tests."""

    def submit(
        self,
        work: Callable[[], T],
        deliver: Callable[[T], None],
        cancelled: Cancelled | None = None,
    ) -> None:
        result = work()
        if cancelled is None or not cancelled():
            deliver(result)


class ThreadDispatcher:
    """Runs work on a daemon thread and hands the result back through ``post``.

    ``post`` must marshal the callback onto the UI thread, e.g. ``tk_poster(root)``.
    Once ``cancelled()`` is true the worker drops its result without posting, so an
    unmounted screen never schedules callbacks on a window that may be gone. ``work``
    is expected to convert its own errors into a value.
    """

    def __init__(self, post: Poster) -> None:
        self._post = post

    def submit(
        self,
        work: Callable[[], T],
        deliver: Callable[[T], None],
        cancelled: Cancelled | None = None,
    ) -> None:
        def worker() -> None:
            result = work()
            if cancelled is not None and cancelled():
                return
            self._post(lambda: deliver(result))

        threading.Thread(target=worker, daemon=True).start()


def tk_poster(root: Any) -> Poster:
    return lambda callback: root.after(0, callback)
