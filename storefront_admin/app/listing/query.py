from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from storefront_admin.app.config import PAGE_SIZE_OPTIONS


@dataclass(frozen=True)
class FilterSpec:
    """A categorical filter; ``key`` doubles as the query parameter name."""

    key: str
    label: str
    options: tuple[str, ...] = ()
    option_labels: dict[str, str] = field(default_factory=dict)

    def label_for(self, value: str) -> str:
        return self.option_labels.get(value, value)


@dataclass(frozen=True)
class ListQuery:
    page: int = 1
    page_size: int = PAGE_SIZE_OPTIONS[0]
    search: str = ""
    filters: dict[str, str] = field(default_factory=dict)

    def with_page(self, page: int) -> "ListQuery":
        return replace(self, page=page)

    def with_search(self, text: str) -> "ListQuery":
        return replace(self, search=text, page=1)

    def with_filter(self, key: str, value: str | None) -> "ListQuery":
        filters = dict(self.filters)
        filters[key] = value or ""
        return replace(self, filters=filters, page=1)

    def with_page_size(self, page_size: int) -> "ListQuery":
        return replace(self, page_size=page_size, page=1)

    def cleared(self) -> "ListQuery":
        return replace(self, search="", filters={key: "" for key in self.filters}, page=1)

    def active_filters(self) -> dict[str, str]:
        return clean_filters(self.filters)

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"page": self.page, "limit": self.page_size}
        search = self.search.strip()
        if search:
            params["search"] = search
        params.update(self.active_filters())
        return params


def clean_filters(filters: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in filters.items() if value not in (None, "")}
