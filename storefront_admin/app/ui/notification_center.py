from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class Notice:
    source: str
    level: str
    title: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    repeat: int = 1

    def same_as(self, other: "Notice") -> bool:
        return (self.source, self.level, self.title, self.message) == (
            other.source,
            other.level,
            other.title,
            other.message,
        )


class NotificationCenter:
    """Toasts shared by the screens of one window, tagged with the screen that raised them.

    Pushing a notice identical to one still shown bumps its ``repeat`` count
    instead of stacking a second toast.
    """

    def __init__(self) -> None:
        self._notices: list[Notice] = []

    def push(
        self,
        *,
        source: str,
        level: str,
        title: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> Notice:
        notice = Notice(source=source, level=level, title=title, message=message, details=details or {})
        for existing in self._notices:
            if existing.same_as(notice):
                existing.repeat += 1
                existing.details = notice.details
                return existing
        self._notices.append(notice)
        return notice

    def notices(self, source: str | None = None) -> list[Notice]:
        return [notice for notice in self._notices if source is None or notice.source == source]

    def dismiss(self, index: int) -> None:
        if 0 <= index < len(self._notices):
            self._notices.pop(index)

    def clear(self, source: str | None = None) -> None:
        self._notices = [notice for notice in self._notices if source is not None and notice.source != source]

    def render(self, source: str | None = None) -> dict[str, Any]:
        notices = self.notices(source)
        return {"count": len(notices), "messages": [asdict(notice) for notice in notices]}
