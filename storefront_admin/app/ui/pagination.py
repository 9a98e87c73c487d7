from __future__ import annotations

import math
from dataclasses import dataclass

ELLIPSIS_LABEL = "..."
NARROW_VIEWPORT_PX = 640


@dataclass(frozen=True)
class PageEntry:
    page: int | None
    is_current: bool = False

    @property
    def is_ellipsis(self) -> bool:
        return self.page is None

    @property
    def label(self) -> str:
        return ELLIPSIS_LABEL if self.page is None else str(self.page)


ELLIPSIS = PageEntry(page=None)


@dataclass(frozen=True)
class PaginationWindow:
    entries: tuple[PageEntry, ...]
    current_page: int
    total_pages: int

    def pages(self) -> list[int]:
        return [entry.page for entry in self.entries if entry.page is not None]

    def labels(self) -> list[str]:
        return [entry.label for entry in self.entries]

    def render(self) -> dict[str, object]:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "has_previous": self.current_page > 1,
            "has_next": self.current_page < self.total_pages,
            "entries": [{"label": entry.label, "page": entry.page, "current": entry.is_current} for entry in self.entries],
        }


def max_visible_for_width(width_px: int | None) -> int:
    """Narrow viewports get three page buttons, wider ones five."""
    if width_px is not None and width_px < NARROW_VIEWPORT_PX:
        return 3
    return 5


def render_pagination_window(
    current_page: int,
    total_pages: int,
    max_visible: int,
    sibling_count: int = 1,
) -> PaginationWindow:
    """Page buttons for a pager: first, last, a window around ``current_page``, ellipses between.

    ``max_visible`` counts the first and last buttons. Callers clamp
    ``current_page`` into ``[1, total_pages]`` before calling.
    """
    if total_pages < 1:
        raise ValueError(f"total_pages must be >= 1, got {total_pages}")
    if not 1 <= current_page <= total_pages:
        raise ValueError(f"current_page {current_page} outside [1, {total_pages}]")
    if max_visible < 3:
        raise ValueError(f"max_visible must be >= 3, got {max_visible}")
    if sibling_count < 0:
        raise ValueError(f"sibling_count must be >= 0, got {sibling_count}")

    start = max(2, current_page - sibling_count)
    end = min(total_pages - 1, current_page + sibling_count)

    budget = max_visible - 2
    middle = end - start + 1
    if middle > budget:
        overflow = middle - budget
        if current_page <= budget / 2 + 1:
            end = start + budget - 1
        elif current_page >= total_pages - budget / 2:
            start = end - budget + 1
        else:
            start += math.floor(overflow / 2)
            end -= math.ceil(overflow / 2)

        # an interior current page always stays inside the trimmed window
        if 1 < current_page < total_pages:
            if current_page > end:
                start += current_page - end
                end = current_page
            elif current_page < start:
                end -= start - current_page
                start = current_page

    entries: list[PageEntry] = [PageEntry(page=1, is_current=current_page == 1)]
    if start > 2:
        entries.append(ELLIPSIS)
    for page in range(start, end + 1):
        entries.append(PageEntry(page=page, is_current=page == current_page))
    if end < total_pages - 1:
        entries.append(ELLIPSIS)
    if total_pages > 1:
        entries.append(PageEntry(page=total_pages, is_current=current_page == total_pages))

    return PaginationWindow(entries=tuple(entries), current_page=current_page, total_pages=total_pages)
