"""Shared, observable cell holding the active language code."""

from __future__ import annotations

import logging
from typing import Callable

LanguageListener = Callable[[str | None, str | None], None]


class ActiveLanguage:
    """A single language-code cell with change notification.

    Every consumer that holds the same cell sees the same language, so a
    switch made by one selector is visible to all text rendered from it.
    """

    def __init__(self, initial: str | None = None) -> None:
        self._value = initial
        self._listeners: list[LanguageListener] = []

    @property
    def value(self) -> str | None:
        """Current language code, or None when unset."""
        return self._value

    def set(self, code: str | None) -> None:
        """Replace the language code and notify listeners if it changed.

        Args:
            code: New language code, or None.
        """
        old = self._value
        if code == old:
            return

        self._value = code
        logging.info('Active language: %r -> %r', old, code)
        for listener in list(self._listeners):
            listener(old, code)

    def subscribe(self, listener: LanguageListener) -> Callable[[], None]:
        """Register a listener called as listener(old, new) on each change.

        Args:
            listener: Callback.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
