"""
Dropbox-backed preference store.

Each app instance keeps one JSON payload in the Dropbox App Folder at
preferences/<instance>.json, with values grouped per owner (one browser
client). Credentials come from the [dropbox] section of Streamlit secrets,
or from DROPBOX_APP_KEY, DROPBOX_APP_SECRET and DROPBOX_REFRESH_TOKEN.
"""

from __future__ import annotations

import dropbox
import streamlit as st

from langswitch.config import get_secret
from persistence.preference_store import (
    PreferenceStoreError,
    default_payload,
    dump_payload,
    owner_lock,
    parse_payload,
    read_value,
    with_value,
)

CREDENTIAL_NAMES = ('DROPBOX_APP_KEY', 'DROPBOX_APP_SECRET', 'DROPBOX_REFRESH_TOKEN')


class DropboxStoreError(PreferenceStoreError):
    """Raised when Dropbox operations fail."""


@st.cache_resource(show_spinner=False)
def get_dropbox_client() -> dropbox.Dropbox:
    """Build one Dropbox client per process (OAuth refresh token flow)."""
    creds = {name: get_secret(name, '', section='dropbox').strip() for name in CREDENTIAL_NAMES}
    missing = [name for name, value in creds.items() if not value]
    if missing:
        raise DropboxStoreError('Missing Dropbox credentials: ' + ', '.join(missing) + '.')

    return dropbox.Dropbox(
        oauth2_refresh_token=creds['DROPBOX_REFRESH_TOKEN'],
        app_key=creds['DROPBOX_APP_KEY'],
        app_secret=creds['DROPBOX_APP_SECRET'],
    )


def preferences_path(instance: str) -> str:
    """Dropbox path for an instance's preference payload: 'Regional App' -> regional_app."""
    base = str(instance).strip().strip('/').split('/')[-1].split('.')[0]
    base = '_'.join(base.lower().split()) or 'default'
    return f'/preferences/{base}.json'


class DropboxPreferenceStore:
    """Preference store kept as one JSON file in Dropbox."""

    def __init__(
        self,
        instance: str,
        *,
        owner: str = 'default',
        dbx: dropbox.Dropbox | None = None,
    ) -> None:
        self.path = preferences_path(instance)
        self.owner = str(owner)
        self._dbx = dbx

    @property
    def dbx(self) -> dropbox.Dropbox:
        if self._dbx is None:
            self._dbx = get_dropbox_client()
        return self._dbx

    def _load(self) -> dict[str, object]:
        try:
            _md, res = self.dbx.files_download(self.path)
        except dropbox.exceptions.ApiError as exc:
            err = exc.error
            if hasattr(err, 'is_path') and err.is_path() and err.get_path().is_not_found():
                return default_payload()
            raise DropboxStoreError(f'Failed to download "{self.path}": {exc}') from exc
        return parse_payload(res.content.decode('utf-8', errors='replace'), source=self.path)

    def set(self, key: str, value: str) -> None:
        with owner_lock(self.path):
            payload = with_value(self._load(), self.owner, key, value)
            try:
                self.dbx.files_upload(
                    dump_payload(payload).encode('utf-8'),
                    self.path,
                    mode=dropbox.files.WriteMode.overwrite,
                    mute=True,
                )
            except dropbox.exceptions.ApiError as exc:
                raise DropboxStoreError(f'Failed to upload "{self.path}": {exc}') from exc

    def get(self, key: str) -> str | None:
        with owner_lock(self.path):
            return read_value(self._load(), self.owner, key)
