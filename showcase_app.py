from __future__ import annotations

from langswitch.app import LanguageAppConfig, run_language_app
from ui.i18n.translations import SHOWCASE_KEYS, SHOWCASE_OPTIONS


def main() -> None:
    """Showcase entry point (five offered languages)."""
    cfg = LanguageAppConfig(
        title='Language switcher',
        options=tuple(SHOWCASE_OPTIONS),
        message_keys=tuple(SHOWCASE_KEYS),
        instance='showcase',
    )
    run_language_app(cfg=cfg)


if __name__ == '__main__':
    main()
