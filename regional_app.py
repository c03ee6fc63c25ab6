from __future__ import annotations

from langswitch.app import LanguageAppConfig, run_language_app
from ui.i18n.translations import REGIONAL_KEYS, REGIONAL_OPTIONS


def main() -> None:
    """Regional entry point (English, Tamil, Spanish, Telugu)."""
    cfg = LanguageAppConfig(
        title='Language switcher',
        options=tuple(REGIONAL_OPTIONS),
        message_keys=tuple(REGIONAL_KEYS),
        instance='regional',
    )
    run_language_app(cfg=cfg)


if __name__ == '__main__':
    main()
