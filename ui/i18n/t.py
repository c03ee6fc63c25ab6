"""Translation helper."""

from ui.i18n.state import get_catalog


def t(key: str, **kwargs: object) -> str:
    """Translate a UI string key using the session's active language.

    Falls back to the key itself.

    Args:
        key: Translation key.
        **kwargs: Optional format arguments.

    Returns:
        Translated string.
    """
    return get_catalog().lookup(key, **kwargs)
