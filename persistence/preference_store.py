"""
Key-value storage for the persisted language preference.

All stores share the same tiny interface:

    store.set(key, value)
    store.get(key) -> str | None

Shared stores (a JSON file, Dropbox) serve many browser sessions, so their
values are grouped per owner, one owner per browser client:

    {"version": 2, "updated_at": "...", "values": {"<owner>": {"lang": "de"}}}
"""

from __future__ import annotations

import json
import threading
import time
from pathlib import Path
from typing import MutableMapping, Protocol

PREFERENCE_KEY = 'lang'
PAYLOAD_VERSION = 2
SESSION_STATE_KEY = 'preferences'

_locks: dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


class PreferenceStoreError(RuntimeError):
    """Raised when a preference store cannot be read or written."""


class PreferenceStore(Protocol):
    """Durable string key-value storage."""

    def set(self, key: str, value: str) -> None:
        ...

    def get(self, key: str) -> str | None:
        ...


def owner_lock(name: str) -> threading.Lock:
    """Process-wide lock for one shared payload (Streamlit sessions run on threads)."""
    with _locks_guard:
        return _locks.setdefault(name, threading.Lock())


def _now_iso_utc() -> str:
    """Return a compact ISO-like UTC timestamp string."""
    return time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime())


def default_payload() -> dict[str, object]:
    """Create the default JSON payload for shared stores."""
    return {
        'version': PAYLOAD_VERSION,
        'updated_at': _now_iso_utc(),
        'values': {},
    }


def parse_payload(text: str, *, source: str) -> dict[str, object]:
    """
    Parse and complete a stored JSON payload.

    Args:
        text: Raw JSON text.
        source: Path or name used in error messages.

    Returns:
        Payload dict with all default keys present.

    Raises:
        PreferenceStoreError: If the text is not a JSON object.
    """
    try:
        payload = json.loads(text)
        if not isinstance(payload, dict):
            raise ValueError('Payload is not a JSON object.')
    except ValueError as exc:
        raise PreferenceStoreError(f'Failed to parse store file "{source}": {exc}') from exc

    base = default_payload()
    for key, value in base.items():
        payload.setdefault(key, value)
    if not isinstance(payload['values'], dict):
        payload['values'] = {}
    return payload


def dump_payload(payload: dict[str, object]) -> str:
    """Serialize a payload, stamping updated_at."""
    payload_out = dict(payload)
    payload_out['updated_at'] = _now_iso_utc()
    return json.dumps(payload_out, ensure_ascii=False, indent=2)


def read_value(payload: dict[str, object], owner: str, key: str) -> str | None:
    """Value stored for (owner, key), or None."""
    owned = payload['values'].get(owner)
    if not isinstance(owned, dict):
        return None
    value = owned.get(str(key))
    return value if isinstance(value, str) else None


def with_value(payload: dict[str, object], owner: str, key: str, value: str) -> dict[str, object]:
    """Copy of payload with (owner, key) set to value; other owners untouched."""
    values = dict(payload['values'])
    owned = values.get(owner)
    owned = dict(owned) if isinstance(owned, dict) else {}
    owned[str(key)] = str(value)
    values[owner] = owned
    return {**payload, 'values': values}


class MemoryPreferenceStore:
    """Dict-backed store (tests, headless use)."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})

    def set(self, key: str, value: str) -> None:
        self.values[str(key)] = str(value)

    def get(self, key: str) -> str | None:
        return self.values.get(str(key))


class SessionPreferenceStore:
    """
    Store values in a Streamlit session_state-like mapping.

    Values live as long as the browser session, in a dict of their own under
    session_state['preferences'], so 'lang' here never collides with the
    'lang' select box key.
    """

    def __init__(self, state: MutableMapping[str, object]) -> None:
        self._state = state

    def _values(self) -> dict[str, str]:
        values = self._state.get(SESSION_STATE_KEY)
        if not isinstance(values, dict):
            values = {}
            self._state[SESSION_STATE_KEY] = values
        return values

    def set(self, key: str, value: str) -> None:
        self._values()[str(key)] = str(value)

    def get(self, key: str) -> str | None:
        value = self._values().get(str(key))
        return value if isinstance(value, str) else None


class JsonFilePreferenceStore:
    """Store one owner's values in a local JSON file shared by all owners."""

    def __init__(self, path: str | Path, *, owner: str = 'default') -> None:
        self.path = Path(path)
        self.owner = str(owner)

    def _load(self) -> dict[str, object]:
        if not self.path.exists():
            return default_payload()
        try:
            text = self.path.read_text(encoding='utf-8')
        except OSError as exc:
            raise PreferenceStoreError(f'Failed to read "{self.path}": {exc}') from exc
        return parse_payload(text, source=str(self.path))

    def set(self, key: str, value: str) -> None:
        with owner_lock(str(self.path.resolve())):
            payload = with_value(self._load(), self.owner, key, value)
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text(dump_payload(payload), encoding='utf-8')
            except OSError as exc:
                raise PreferenceStoreError(f'Failed to write "{self.path}": {exc}') from exc

    def get(self, key: str) -> str | None:
        with owner_lock(str(self.path.resolve())):
            return read_value(self._load(), self.owner, key)
