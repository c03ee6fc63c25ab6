"""Translation catalog: immutable resources plus an active-language pointer."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping

from langswitch.active_language import ActiveLanguage, LanguageListener

DEFAULT_NAMESPACE = 'translation'
DEFAULT_KEY_SEPARATOR = '.'


@dataclass(frozen=True)
class CatalogConfig:
    """Startup options for a TranslationCatalog.

    Resources are either flat, {lang: {key: text}}, or namespaced,
    {lang: {namespace: {key: text}}}. An entry is unwrapped only when its
    sole key is `namespace` and that key maps to a dict.

    key_separator is False for flat keys, True for the default '.', or a
    separator string; with a separator, keys are paths into nested dicts.
    """

    default_language: str | None
    resources: Mapping[str, Mapping[str, object]] = field(default_factory=dict)
    key_separator: str | bool = False
    escape_output: bool = False
    namespace: str = DEFAULT_NAMESPACE
    fallback_language: str | None = None


def _freeze(value: object) -> object:
    """Return a read-only copy of nested message dicts."""
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): _freeze(v) for k, v in value.items()})
    return str(value)


def _flatten(messages: Mapping[str, object], *, sep: str, prefix: str = '') -> dict[str, str]:
    """Flatten nested message dicts into sep-joined keys."""
    out: dict[str, str] = {}
    for key, value in messages.items():
        full = f'{prefix}{sep}{key}' if prefix else str(key)
        if isinstance(value, Mapping):
            out.update(_flatten(value, sep=sep, prefix=full))
        else:
            out[full] = str(value)
    return out


class TranslationCatalog:
    """Lookup of message keys against the currently active language.

    Missing keys, and lookups while no known language is active, return the
    key itself.
    """

    def __init__(self, config: CatalogConfig, *, cell: ActiveLanguage | None = None) -> None:
        self._config = config
        if config.key_separator is True:
            self._sep = DEFAULT_KEY_SEPARATOR
        elif isinstance(config.key_separator, str):
            self._sep = config.key_separator
        else:
            self._sep = ''

        sets: dict[str, object] = {}
        for lang, entry in config.resources.items():
            messages = entry
            if isinstance(entry, Mapping) and set(entry) == {config.namespace}:
                ns_entry = entry[config.namespace]
                if isinstance(ns_entry, Mapping):
                    messages = ns_entry
            sets[str(lang)] = _freeze(messages)
        self._resources: Mapping[str, Mapping[str, object]] = MappingProxyType(sets)

        self._cell = cell if cell is not None else ActiveLanguage(config.default_language)
        if cell is not None and cell.value is None and config.default_language:
            cell.set(config.default_language)

    @property
    def config(self) -> CatalogConfig:
        return self._config

    @property
    def cell(self) -> ActiveLanguage:
        """The shared active-language cell."""
        return self._cell

    @property
    def resources(self) -> Mapping[str, Mapping[str, object]]:
        return self._resources

    @property
    def languages(self) -> list[str]:
        """Language codes that have a message set, sorted."""
        return sorted(self._resources)

    @property
    def active_language(self) -> str | None:
        return self._cell.value

    def set_active_language(self, code: str | None) -> None:
        """Switch the active language.

        Unknown codes, and None, are accepted: lookups then return raw keys.

        Args:
            code: Language code, or None.
        """
        if code is not None and code not in self._resources:
            logging.info('No resources for language %r; falling back to keys.', code)
        self._cell.set(code)

    def subscribe(self, listener: LanguageListener) -> Callable[[], None]:
        """Subscribe to active-language changes (see ActiveLanguage.subscribe)."""
        return self._cell.subscribe(listener)

    def _resolve(self, lang: str | None, key: str) -> str | None:
        if lang is None:
            return None
        messages = self._resources.get(lang)
        if messages is None:
            return None

        if not self._sep:
            value = messages.get(key)
            return value if isinstance(value, str) else None

        node: object = messages
        for part in key.split(self._sep):
            if not isinstance(node, Mapping):
                return None
            node = node.get(part)
        return node if isinstance(node, str) else None

    def has(self, key: str, *, language: str | None = None) -> bool:
        """Return True if key resolves in language (default: active language)."""
        lang = self.active_language if language is None else language
        return self._resolve(lang, key) is not None

    def lookup(self, key: str, **kwargs: object) -> str:
        """Translate a message key using the active language.

        Falls back to fallback_language (if configured), then to the key.

        Args:
            key: Message key.
            **kwargs: Optional format arguments.

        Returns:
            Translated string.
        """
        text = self._resolve(self.active_language, key)
        if text is None and self._config.fallback_language:
            text = self._resolve(self._config.fallback_language, key)
        if text is None:
            text = key

        if kwargs:
            if self._config.escape_output:
                kwargs = {k: html.escape(str(v)) for k, v in kwargs.items()}
            try:
                return text.format(**kwargs)
            except (KeyError, IndexError, ValueError):
                return text

        return text

    t = lookup

    def missing_keys(self) -> dict[str, list[str]]:
        """Keys each language lacks compared to the union of all languages.

        Returns:
            {lang: sorted missing keys}, only for languages with gaps.
        """
        sep = self._sep or '.'
        flat = {lang: set(_flatten(msgs, sep=sep)) for lang, msgs in self._resources.items()}
        union: set[str] = set().union(*flat.values()) if flat else set()
        return {
            lang: sorted(union - keys)
            for lang, keys in sorted(flat.items())
            if union - keys
        }
