"""Widgets related to language selection."""

import streamlit as st

from langswitch.selector import LanguageSelector
from ui.i18n.t import t


def language_selector(selector: LanguageSelector, *, key: str = 'lang') -> str:
    """Render a select box bound to a LanguageSelector.

    The selection is handled in the widget's on_change callback, which
    Streamlit runs after the new value is committed and before the rerun.

    Args:
        selector: Selector providing options and handling the change.
        key: Streamlit widget key (also the control's name).

    Returns:
        Currently selected language code.
    """
    def _on_change() -> None:
        selector.select(st.session_state[key])

    if key not in st.session_state:
        st.session_state[key] = selector.options[selector.index_of(selector.active_language)]

    st.selectbox(
        t('SelectLanguage'),
        options=selector.options,
        format_func=selector.label_for,
        key=key,
        on_change=_on_change,
        label_visibility='collapsed',
    )
    return selector.active_language


def translated_text(keys: list[str]) -> None:
    """Render one paragraph per message key in the active language."""
    for message_key in keys:
        st.markdown(t(message_key))
