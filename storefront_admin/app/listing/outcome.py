from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class ListResult:
    items: list[dict[str, Any]] = field(default_factory=list)
    total_items: int = 0
    total_pages: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_items", max(0, int(self.total_items)))
        object.__setattr__(self, "total_pages", max(1, int(self.total_pages)))


EMPTY_RESULT = ListResult()


@dataclass(frozen=True)
class Loading:
    status = "loading"


@dataclass(frozen=True)
class Success:
    result: ListResult
    status = "success"


@dataclass(frozen=True)
class EmptyNotFound:
    """The server answered 404: no resources match the query."""

    status = "empty_not_found"

    @property
    def result(self) -> ListResult:
        return EMPTY_RESULT


@dataclass(frozen=True)
class Failure:
    """A failed fetch; ``code`` and ``suggestion`` feed the error notification."""

    message: str
    trace_id: str | None = None
    status_code: int | None = None
    code: str = "INTERNAL_ERROR"
    suggestion: str | None = None
    status = "failure"


FetchOutcome = Union[Loading, Success, EmptyNotFound, Failure]


def result_of(outcome: FetchOutcome) -> ListResult | None:
    if isinstance(outcome, (Success, EmptyNotFound)):
        return outcome.result
    return None
