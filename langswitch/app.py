"""
Shared Streamlit language-switching application.

Instance-specific apps should only provide configuration and call
`run_language_app(cfg=...)`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import logging

import streamlit as st

from langswitch.selector import DEFAULT_LANGUAGE
from langswitch.config import get_secret
from persistence.dropbox_store import DropboxPreferenceStore
from persistence.preference_store import (
    JsonFilePreferenceStore,
    PreferenceStore,
    SessionPreferenceStore,
)
from ui.i18n.state import get_client_id, get_selector, init_language_if_missing
from ui.i18n.widgets import language_selector, translated_text

LOGFILE_DEFAULT: str = 'langswitch_log.txt'
STORE_BACKENDS: tuple[str, ...] = ('session', 'file', 'dropbox')


class ConfigError(ValueError):
    """Raised for invalid app configuration."""


@dataclass(frozen=True)
class LanguageAppConfig:
    """Configuration for a language-switching app instance."""

    title: str
    options: tuple[tuple[str, str], ...]
    message_keys: tuple[str, ...]
    instance: str = 'langswitch'
    store_backend: str = 'session'
    store_path: Path = field(default_factory=lambda: Path('data') / 'preferences.json')
    default_language: str = DEFAULT_LANGUAGE
    restore_saved_language: bool = False
    confirm_writes: bool = True
    logfile: str = LOGFILE_DEFAULT


def _setup_logging(*, logfile: str) -> None:
    """Configure logging once per process."""
    if getattr(_setup_logging, '_configured', False):
        return

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        handlers=[
            logging.FileHandler(logfile, mode='a', encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )
    setattr(_setup_logging, '_configured', True)


def resolve_config(cfg: LanguageAppConfig) -> LanguageAppConfig:
    """
    Apply secret/env overrides and validate the configuration.

    Overrides:
      - LANGSWITCH_STORE: store backend name
      - LANGSWITCH_STORE_PATH: JSON file path for the 'file' backend

    Raises:
        ConfigError: On an unknown backend or an empty option list.
    """
    backend = get_secret('LANGSWITCH_STORE', cfg.store_backend).strip().lower()
    store_path = get_secret('LANGSWITCH_STORE_PATH', str(cfg.store_path)).strip()

    if backend not in STORE_BACKENDS:
        raise ConfigError(
            f'Unknown store backend "{backend}"; expected one of: ' + ', '.join(STORE_BACKENDS),
        )
    if not cfg.options:
        raise ConfigError('At least one language option is required.')

    return LanguageAppConfig(
        title=cfg.title,
        options=tuple(cfg.options),
        message_keys=tuple(cfg.message_keys),
        instance=cfg.instance,
        store_backend=backend,
        store_path=Path(store_path),
        default_language=cfg.default_language,
        restore_saved_language=cfg.restore_saved_language,
        confirm_writes=cfg.confirm_writes,
        logfile=cfg.logfile,
    )


def make_store(cfg: LanguageAppConfig) -> PreferenceStore:
    """Build the preference store selected by cfg.store_backend.

    Shared backends (file, dropbox) keep each browser client's values apart.
    """
    if cfg.store_backend == 'session':
        return SessionPreferenceStore(st.session_state)
    if cfg.store_backend == 'dropbox':
        return DropboxPreferenceStore(cfg.instance, owner=get_client_id())
    return JsonFilePreferenceStore(cfg.store_path, owner=get_client_id())


def run_language_app(*, cfg: LanguageAppConfig) -> None:
    """Run the shared Streamlit language-switching app for the given configuration."""
    cfg = resolve_config(cfg)
    _setup_logging(logfile=cfg.logfile)
    logging.info('Starting language app: %s (store=%s)', cfg.instance, cfg.store_backend)

    init_language_if_missing(default_lang=cfg.default_language)
    selector = get_selector(
        cfg.instance,
        options=cfg.options,
        store_factory=lambda: make_store(cfg),
        default_lang=cfg.default_language,
        confirm_writes=cfg.confirm_writes,
        restore_saved=cfg.restore_saved_language,
    )

    st.title(cfg.title)
    language_selector(selector, key='lang')
    translated_text(list(cfg.message_keys))
