"""
Tests for the local preference stores.
"""

import json

import pytest

from persistence.preference_store import (
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStoreError,
    SessionPreferenceStore,
    parse_payload,
    read_value,
    with_value,
)


def test_memory_store():
    store = MemoryPreferenceStore()
    assert store.get('lang') is None

    store.set('lang', 'de')
    assert store.get('lang') == 'de'


def test_session_store_keeps_lang_apart_from_widget_key():
    state = {'lang': 'widget-value'}
    store = SessionPreferenceStore(state)

    assert store.get('lang') is None
    store.set('lang', 'tm')

    assert store.get('lang') == 'tm'
    assert state == {'lang': 'widget-value', 'preferences': {'lang': 'tm'}}


def test_json_file_store_survives_new_instance(tmp_path):
    path = tmp_path / 'nested' / 'prefs.json'

    JsonFilePreferenceStore(path, owner='abc').set('lang', 'sp')

    assert JsonFilePreferenceStore(path, owner='abc').get('lang') == 'sp'
    payload = json.loads(path.read_text(encoding='utf-8'))
    assert payload['values'] == {'abc': {'lang': 'sp'}}
    assert payload['version'] == 2
    assert payload['updated_at']


def test_json_file_store_owners_do_not_see_each_other(tmp_path):
    path = tmp_path / 'prefs.json'
    first = JsonFilePreferenceStore(path, owner='first')
    second = JsonFilePreferenceStore(path, owner='second')

    first.set('lang', 'tm')
    second.set('lang', 'sp')

    assert first.get('lang') == 'tm'
    assert second.get('lang') == 'sp'
    assert JsonFilePreferenceStore(path, owner='third').get('lang') is None


def test_json_file_store_keeps_other_values(tmp_path):
    path = tmp_path / 'prefs.json'
    store = JsonFilePreferenceStore(path)

    store.set('theme', 'dark')
    store.set('lang', 'tl')
    store.set('lang', 'en')

    assert store.get('theme') == 'dark'
    assert store.get('lang') == 'en'


def test_json_file_store_missing_file(tmp_path):
    assert JsonFilePreferenceStore(tmp_path / 'absent.json').get('lang') is None


def test_json_file_store_corrupt_file(tmp_path):
    path = tmp_path / 'prefs.json'
    path.write_text('not json', encoding='utf-8')

    with pytest.raises(PreferenceStoreError):
        JsonFilePreferenceStore(path).get('lang')


def test_json_file_store_write_failure(tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('', encoding='utf-8')

    with pytest.raises(PreferenceStoreError):
        JsonFilePreferenceStore(blocker / 'prefs.json').set('lang', 'en')


def test_parse_payload_fills_defaults():
    payload = parse_payload('{"values": ["bad"]}', source='x')
    assert payload['values'] == {}
    assert payload['version'] == 2

    with pytest.raises(PreferenceStoreError):
        parse_payload('[1, 2]', source='x')


def test_with_value_leaves_input_and_other_owners_alone():
    payload = {'version': 2, 'values': {'a': {'lang': 'en'}, 'b': 'junk'}}

    updated = with_value(payload, 'b', 'lang', 'tl')

    assert payload['values'] == {'a': {'lang': 'en'}, 'b': 'junk'}
    assert updated['values'] == {'a': {'lang': 'en'}, 'b': {'lang': 'tl'}}
    assert read_value(updated, 'a', 'lang') == 'en'
    assert read_value(payload, 'b', 'lang') is None
