from __future__ import annotations

import logging
import re
from typing import Callable, Iterable

from storefront_admin.app.config import PAGE_SIZE_OPTIONS
from storefront_admin.app.infrastructure.logging.logger import get_logger, log_action
from storefront_admin.app.listing.dispatch import Dispatcher, ImmediateDispatcher
from storefront_admin.app.listing.outcome import (
    EMPTY_RESULT,
    Failure,
    FetchOutcome,
    ListResult,
    Loading,
    result_of,
)
from storefront_admin.app.listing.query import ListQuery


FetchFn = Callable[[ListQuery], FetchOutcome]
Listener = Callable[["ListController"], None]
FailureHandler = Callable[[Failure], None]

PAGE_INPUT = re.compile(r"\s*([+-]?\d+)")


class ListController:
    """Owns the query state of one list screen and keeps it in sync with the server.

    Every mutation that changes the query schedules exactly one fetch. Each fetch
    is tagged with a generation number and only the latest generation may apply
    its outcome, so a slow response can never overwrite a newer one.
    """

    def __init__(
        self,
        fetch: FetchFn,
        *,
        filter_keys: Iterable[str] = (),
        page_size: int = PAGE_SIZE_OPTIONS[0],
        dispatcher: Dispatcher | None = None,
        module: str = "listing",
        logger: logging.Logger | None = None,
        on_failure: FailureHandler | None = None,
    ) -> None:
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"Unsupported page size {page_size}; expected one of {PAGE_SIZE_OPTIONS}")
        self._fetch = fetch
        self._on_failure = on_failure
        self._dispatcher = dispatcher or ImmediateDispatcher()
        self._query = ListQuery(page_size=page_size, filters={key: "" for key in filter_keys})
        self._generation = 0
        self._started = False
        self._closed = False
        self._listeners: list[Listener] = []
        self.module = module
        self.logger = logger or get_logger("storefront_admin.listing")
        self.outcome: FetchOutcome = Loading()
        self.result: ListResult = EMPTY_RESULT
        self.page_input = "1"

    @property
    def query(self) -> ListQuery:
        return self._query

    @property
    def page(self) -> int:
        return self._query.page

    @property
    def items(self) -> list[dict]:
        return self.result.items

    @property
    def total_items(self) -> int:
        return self.result.total_items

    @property
    def total_pages(self) -> int:
        return self.result.total_pages

    @property
    def is_loading(self) -> bool:
        return isinstance(self.outcome, Loading)

    @property
    def error(self) -> str | None:
        return self.outcome.message if isinstance(self.outcome, Failure) else None

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def closed(self) -> bool:
        return self._closed

    def showing_range(self) -> tuple[int, int, int]:
        total = self.total_items
        if total == 0:
            return 0, 0, 0
        start = (self.page - 1) * self._query.page_size + 1
        end = min(self.page * self._query.page_size, total)
        return start, end, total

    def start(self) -> None:
        """Mount: issue the first fetch. Mutations made before this only update the query."""
        self._started = True
        self._schedule("mount")

    def set_search(self, text: str | None) -> bool:
        return self._update(self._query.with_search(text or ""), "set_search")

    def set_filter(self, key: str, value: str | None) -> bool:
        if key not in self._query.filters:
            raise ValueError(f"Unknown filter {key!r} for {self.module}")
        return self._update(self._query.with_filter(key, value), "set_filter")

    def set_page_size(self, page_size: int) -> bool:
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"Unsupported page size {page_size}; expected one of {PAGE_SIZE_OPTIONS}")
        return self._update(self._query.with_page_size(page_size), "set_page_size")

    def set_page(self, page: int) -> bool:
        """Move to ``page``; out-of-range values are ignored and return False."""
        if isinstance(page, bool) or not isinstance(page, int) or not 1 <= page <= self.total_pages:
            return False
        self.page_input = str(page)
        self._update(self._query.with_page(page), "set_page")
        return True

    def previous_page(self) -> bool:
        return self.set_page(self.page - 1)

    def next_page(self) -> bool:
        return self.set_page(self.page + 1)

    def set_page_input(self, raw: str) -> None:
        self.page_input = raw
        self._emit()

    def go_to_page(self, raw_input: str | None = None) -> bool:
        raw = self.page_input if raw_input is None else raw_input
        match = PAGE_INPUT.match(str(raw or ""))
        requested = int(match.group(1)) if match else None
        if requested is None or not 1 <= requested <= self.total_pages:
            self.page_input = str(self.page)
            self._emit()
            return False
        return self.set_page(requested)

    def clear_filters(self) -> None:
        # Always refetch: when the filters were already empty nothing else would trigger it.
        self._query = self._query.cleared()
        self.page_input = "1"
        self._schedule("clear_filters")

    def retry(self) -> None:
        self._schedule("retry")

    def close(self) -> None:
        """Unmount: pending fetches can no longer touch this controller."""
        self._closed = True
        self._generation += 1
        self._listeners.clear()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, query: ListQuery, reason: str) -> bool:
        if query.page == 1:
            self.page_input = "1"
        if query == self._query:
            self._emit()
            return False
        self._query = query
        self._schedule(reason)
        return True

    def _schedule(self, reason: str) -> None:
        if self._closed or not self._started:
            self._emit()
            return
        self._generation += 1
        generation = self._generation
        query = self._query
        self.outcome = Loading()
        log_action(self.logger, self.module, "list.schedule", reason, generation=generation, params=query.to_params())
        self._emit()
        self._dispatcher.submit(
            lambda: self._run_fetch(query),
            lambda outcome: self._apply(generation, query, outcome),
            cancelled=lambda: self._closed,
        )

    def _run_fetch(self, query: ListQuery) -> FetchOutcome:
        try:
            return self._fetch(query)
        except Exception as error:  # noqa: BLE001
            log_action(self.logger, self.module, "list.fetch", "crashed", level=logging.ERROR, error=repr(error))
            return Failure(
                message=f"Failed to fetch {self.module}",
                suggestion="Retry and report the incident if it persists.",
            )

    def _apply(self, generation: int, query: ListQuery, outcome: FetchOutcome) -> None:
        if self._closed or generation != self._generation:
            log_action(
                self.logger,
                self.module,
                "list.apply",
                "discarded_stale",
                generation=generation,
                latest_generation=self._generation,
                closed=self._closed,
            )
            return
        self.outcome = outcome
        result = result_of(outcome)
        if result is not None:
            self.result = result
            self.page_input = str(query.page)
        if isinstance(outcome, Failure) and self._on_failure is not None:
            self._on_failure(outcome)
        self._emit()

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self)
