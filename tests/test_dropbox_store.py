"""
Tests for the Dropbox-backed preference store, against a fake client.
"""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import dropbox
import pytest

from persistence import dropbox_store
from persistence.dropbox_store import (
    DropboxPreferenceStore,
    DropboxStoreError,
    preferences_path,
)
from persistence.preference_store import PreferenceStoreError


def _api_error(*, not_found: bool) -> dropbox.exceptions.ApiError:
    err = MagicMock()
    err.is_path.return_value = not_found
    err.get_path.return_value.is_not_found.return_value = not_found
    return dropbox.exceptions.ApiError('req-1', err, None, None)


class FakeDropbox:
    """In-memory stand-in for the few Dropbox calls the store makes."""

    def __init__(self):
        self.files: dict[str, bytes] = {}
        self.fail_upload = False

    def files_download(self, path):
        if path not in self.files:
            raise _api_error(not_found=True)
        return SimpleNamespace(name=path), SimpleNamespace(content=self.files[path])

    def files_upload(self, content, path, mode=None, mute=False):
        if self.fail_upload:
            raise _api_error(not_found=False)
        self.files[path] = content


@pytest.fixture
def fake_dbx():
    return FakeDropbox()


def test_preferences_path():
    assert preferences_path('showcase') == '/preferences/showcase.json'
    assert preferences_path('Regional App.json') == '/preferences/regional_app.json'
    assert preferences_path('') == '/preferences/default.json'


def test_missing_file_reads_none(fake_dbx):
    assert DropboxPreferenceStore('showcase', dbx=fake_dbx).get('lang') is None


def test_set_then_get(fake_dbx):
    store = DropboxPreferenceStore('showcase', owner='abc', dbx=fake_dbx)

    store.set('lang', 'zh')

    assert store.get('lang') == 'zh'
    payload = json.loads(fake_dbx.files['/preferences/showcase.json'].decode('utf-8'))
    assert payload['values'] == {'abc': {'lang': 'zh'}}


def test_owners_share_the_file_but_not_values(fake_dbx):
    first = DropboxPreferenceStore('regional', owner='first', dbx=fake_dbx)
    second = DropboxPreferenceStore('regional', owner='second', dbx=fake_dbx)

    first.set('lang', 'tm')
    second.set('lang', 'tl')

    assert first.get('lang') == 'tm'
    assert second.get('lang') == 'tl'
    assert list(fake_dbx.files) == ['/preferences/regional.json']


def test_upload_failure_is_a_preference_store_error(fake_dbx):
    fake_dbx.fail_upload = True
    store = DropboxPreferenceStore('showcase', dbx=fake_dbx)

    with pytest.raises(PreferenceStoreError):
        store.set('lang', 'de')


def test_download_failure_other_than_not_found(fake_dbx):
    def _boom(path):
        raise _api_error(not_found=False)

    fake_dbx.files_download = _boom
    with pytest.raises(DropboxStoreError):
        DropboxPreferenceStore('showcase', dbx=fake_dbx).get('lang')


def test_missing_credentials(monkeypatch):
    monkeypatch.setattr(dropbox_store, 'get_secret', lambda name, default='', section=None: default)
    dropbox_store.get_dropbox_client.clear()

    with pytest.raises(DropboxStoreError, match='DROPBOX_APP_KEY'):
        dropbox_store.get_dropbox_client()
