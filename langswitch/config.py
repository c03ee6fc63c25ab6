"""Configuration values from Streamlit secrets or the environment."""

from __future__ import annotations

import os

import streamlit as st
from streamlit.errors import StreamlitAPIException


def get_secret(name: str, default: str = '', *, section: str | None = None) -> str:
    """
    Look up a configuration value.

    Order:
      - st.secrets[section][key]  (key is name lowercased, section prefix removed)
      - st.secrets[name]
      - os.environ[name]

    Args:
        name: Value name, e.g. 'LANGSWITCH_STORE' or 'DROPBOX_APP_KEY'.
        default: Returned if the value is not found anywhere.
        section: Optional secrets.toml section, e.g. 'dropbox'.

    Returns:
        The value as a string.
    """
    # st.secrets raises when no secrets.toml exists
    try:
        if section is not None:
            cfg = st.secrets.get(section, None)
            if cfg is not None and hasattr(cfg, 'get'):
                val = cfg.get(name.lower().removeprefix(f'{section}_'), None)
                if val is not None:
                    return str(val)

        val = st.secrets.get(name, None)
        if val is not None:
            return str(val)
    except (FileNotFoundError, KeyError, StreamlitAPIException):
        pass

    return str(os.environ.get(name, default))
