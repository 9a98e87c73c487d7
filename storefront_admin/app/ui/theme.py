from __future__ import annotations

from typing import Callable

ThemeListener = Callable[[bool], None]

_TONE_CLASSES = {
    "warning": ("bg-yellow-400 text-black", "bg-yellow-600 text-white"),
    "info": ("bg-blue-500 text-white", "bg-blue-700 text-white"),
    "success": ("bg-green-500 text-white", "bg-green-700 text-white"),
    "danger": ("bg-red-500 text-white", "bg-red-700 text-white"),
    "attention": ("bg-orange-500 text-white", "bg-orange-700 text-white"),
    "neutral": ("bg-gray-500 text-white", "bg-gray-700 text-white"),
}


class ThemeContext:
    """Dark-mode flag shared by the screens of one window."""

    def __init__(self, dark: bool = False) -> None:
        self._dark = dark
        self._listeners: list[ThemeListener] = []

    @property
    def dark(self) -> bool:
        return self._dark

    def set_dark(self, dark: bool) -> None:
        if dark == self._dark:
            return
        self._dark = dark
        for listener in list(self._listeners):
            listener(dark)

    def toggle(self) -> None:
        self.set_dark(not self._dark)

    def subscribe(self, listener: ThemeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def badge_classes(self, tone: str) -> str:
        light, dark = _TONE_CLASSES.get(tone, _TONE_CLASSES["neutral"])
        return dark if self._dark else light
