"""Language selector: selection state, persistence and catalog switching."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from langswitch.catalog import TranslationCatalog
from persistence.preference_store import PREFERENCE_KEY, PreferenceStore, PreferenceStoreError

DEFAULT_LANGUAGE = 'en'

LanguageOption = tuple[str, str]


class SelectorPhase(enum.Enum):
    INITIALIZED = 'initialized'
    SELECTED = 'selected'


@dataclass(frozen=True)
class SelectorState:
    active_language: str = DEFAULT_LANGUAGE
    phase: SelectorPhase = SelectorPhase.INITIALIZED


class LanguageSelector:
    """A choice of languages bound to a catalog and a preference store.

    The option list is injected and independent of the catalog's languages:
    offering a code the catalog does not know is allowed and leads to raw-key
    text after selection.

    Args:
        options: (code, label) pairs, in display order.
        catalog: Catalog whose active language is switched.
        store: Where the chosen code is persisted.
        default_language: Initial selection.
        confirm_writes: If True, the catalog receives the value read back
            from the store rather than the selected code.
        storage_key: Preference key.
    """

    def __init__(
        self,
        options: Sequence[LanguageOption],
        *,
        catalog: TranslationCatalog,
        store: PreferenceStore,
        default_language: str = DEFAULT_LANGUAGE,
        confirm_writes: bool = True,
        storage_key: str = PREFERENCE_KEY,
    ) -> None:
        self._options: tuple[LanguageOption, ...] = tuple((str(c), str(lbl)) for c, lbl in options)
        self.catalog = catalog
        self.store = store
        self.confirm_writes = confirm_writes
        self.storage_key = storage_key
        self._state = SelectorState(active_language=str(default_language))
        self._listeners: list[Callable[[SelectorState], None]] = []

    @property
    def state(self) -> SelectorState:
        return self._state

    @property
    def active_language(self) -> str:
        return self._state.active_language

    @property
    def options(self) -> list[str]:
        """Offered language codes."""
        return [code for code, _label in self._options]

    @property
    def labels(self) -> dict[str, str]:
        """Code -> display label."""
        return dict(self._options)

    def label_for(self, code: str) -> str:
        return self.labels.get(code, code)

    def index_of(self, code: str | None) -> int:
        """Position of code in the options, 0 if not offered."""
        try:
            return self.options.index(str(code))
        except ValueError:
            return 0

    def on_change(self, listener: Callable[[SelectorState], None]) -> None:
        """Register a listener called with the new state after each selection."""
        self._listeners.append(listener)

    def select(self, code: str) -> None:
        """Handle a user selection.

        The in-memory state is updated first; persisting and switching the
        catalog run afterwards, once the new state is in place.

        Args:
            code: Selected language code.
        """
        self._state = SelectorState(active_language=str(code), phase=SelectorPhase.SELECTED)
        self._after_commit()

    def _after_commit(self) -> None:
        code = self._state.active_language

        try:
            self.store.set(self.storage_key, code)
        except PreferenceStoreError as exc:
            logging.warning('Saving language preference failed: %s', exc)

        if self.confirm_writes:
            try:
                confirmed = self.store.get(self.storage_key)
            except PreferenceStoreError as exc:
                logging.warning('Reading language preference failed: %s', exc)
                confirmed = None
            if confirmed != code:
                logging.warning('Stored language %r does not match selection %r.', confirmed, code)
        else:
            confirmed = code

        self.catalog.set_active_language(confirmed)

        for listener in list(self._listeners):
            listener(self._state)

    def restore(self) -> str | None:
        """Start from the stored preference, if one exists and is offered.

        Returns:
            The restored code, or None.
        """
        try:
            saved = self.store.get(self.storage_key)
        except PreferenceStoreError as exc:
            logging.warning('Reading language preference failed: %s', exc)
            return None

        if saved is None or saved not in self.options:
            return None

        self._state = SelectorState(active_language=saved, phase=self._state.phase)
        self.catalog.set_active_language(saved)
        return saved
