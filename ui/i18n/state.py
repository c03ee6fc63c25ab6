"""Per-session catalog and selector stored in Streamlit session_state."""

from __future__ import annotations

import logging
import uuid
from types import MappingProxyType
from typing import Callable, Sequence

import streamlit as st

from langswitch.active_language import ActiveLanguage
from langswitch.catalog import CatalogConfig, TranslationCatalog
from langswitch.selector import DEFAULT_LANGUAGE, LanguageSelector
from persistence.preference_store import PreferenceStore
from ui.i18n.translations import RESOURCES

STATE_ACTIVE_LANGUAGE = 'active_language_cell'
STATE_CATALOG = 'translation_catalog'
STATE_SELECTORS = 'language_selectors'
STATE_CLIENT_ID = 'client_id'


@st.cache_resource(show_spinner=False)
def get_catalog_config(default_language: str = DEFAULT_LANGUAGE) -> CatalogConfig:
    """Build the process-wide, read-only catalog configuration once."""
    cfg = CatalogConfig(
        default_language=default_language,
        resources=MappingProxyType(RESOURCES),
        key_separator=False,
        escape_output=False,
    )
    gaps = TranslationCatalog(cfg).missing_keys()
    for lang, keys in gaps.items():
        logging.warning('Language %r is missing keys: %s', lang, ', '.join(keys))
    return cfg


def init_language_if_missing(*, default_lang: str = DEFAULT_LANGUAGE) -> None:
    """Create this session's active-language cell and catalog if missing.

    Args:
        default_lang: Language the catalog starts with.
    """
    if STATE_CATALOG in st.session_state:
        return

    cell = ActiveLanguage()
    st.session_state[STATE_ACTIVE_LANGUAGE] = cell
    st.session_state[STATE_CATALOG] = TranslationCatalog(
        get_catalog_config(default_lang),
        cell=cell,
    )


def get_client_id() -> str:
    """Stable id for this browser session, created on first use."""
    if STATE_CLIENT_ID not in st.session_state:
        st.session_state[STATE_CLIENT_ID] = uuid.uuid4().hex
    return str(st.session_state[STATE_CLIENT_ID])


def get_catalog() -> TranslationCatalog:
    """Get this session's catalog, creating it with defaults if needed."""
    init_language_if_missing()
    return st.session_state[STATE_CATALOG]


def get_selector(
    key: str,
    *,
    options: Sequence[tuple[str, str]],
    store_factory: Callable[[], PreferenceStore],
    default_lang: str = DEFAULT_LANGUAGE,
    confirm_writes: bool = True,
    restore_saved: bool = False,
) -> LanguageSelector:
    """Get (or create once) the selector registered under key.

    Selectors in the same session share the session catalog.

    Args:
        key: Selector identity within the session.
        options: (code, label) pairs offered by this selector.
        store_factory: Builds the preference store on first use.
        default_lang: Initial selection.
        confirm_writes: Read the stored value back before switching.
        restore_saved: Start from the stored preference if present.

    Returns:
        The session's selector.
    """
    selectors: dict[str, LanguageSelector] = st.session_state.setdefault(STATE_SELECTORS, {})
    selector = selectors.get(key)
    if selector is not None:
        return selector

    selector = LanguageSelector(
        options,
        catalog=get_catalog(),
        store=store_factory(),
        default_language=default_lang,
        confirm_writes=confirm_writes,
    )
    if restore_saved:
        selector.restore()
    selectors[key] = selector
    return selector
