# oltradius/services/app_settings.py
from __future__ import annotations

import atexit
import enum
import json
import logging
import os
import tempfile
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Optional

from flask import Flask, current_app

from oltradius.config.company import (
    DEFAULT_COMPANY_SETTINGS,
    DEFAULT_LOCALE,
    SETTINGS_STORAGE_KEY,
)

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 0


# =========================================================
# Types
# =========================================================
class Locale(str, enum.Enum):
    ID = "id"
    EN = "en"


# Order matters for to_dict(); logo is the only optional field.
COMPANY_SETTINGS_FIELDS = (
    "name",
    "email",
    "phone",
    "address",
    "base_url",
    "admin_phone",
    "logo",
)
REQUIRED_COMPANY_FIELDS = frozenset(COMPANY_SETTINGS_FIELDS) - {"logo"}


@dataclass(frozen=True)
class CompanySettings:
    name: str
    email: str
    phone: str
    address: str
    base_url: str
    admin_phone: str
    logo: Optional[str] = None

    @classmethod
    def defaults(cls) -> "CompanySettings":
        return cls(**DEFAULT_COMPANY_SETTINGS)

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in COMPANY_SETTINGS_FIELDS}


@dataclass(frozen=True)
class AppState:
    locale: Locale = Locale(DEFAULT_LOCALE)
    company: CompanySettings = field(default_factory=CompanySettings.defaults)

    def to_dict(self) -> dict:
        return {"locale": self.locale.value, "company": self.company.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppState":
        """
        Rebuild state from a persisted snapshot.

        Missing/unknown values fall back to the seed defaults so the
        result is always fully populated.
        """
        try:
            locale = Locale(data.get("locale", DEFAULT_LOCALE))
        except ValueError:
            locale = Locale(DEFAULT_LOCALE)

        raw_company = data.get("company")
        changes = {}
        if isinstance(raw_company, Mapping):
            changes = {
                name: raw_company[name]
                for name in COMPANY_SETTINGS_FIELDS
                if name in raw_company
            }
        company = merge_company_settings(CompanySettings.defaults(), changes)
        return cls(locale=locale, company=company)


Listener = Callable[[AppState, AppState], None]


# =========================================================
# Merge
# =========================================================
def merge_company_settings(
    current: CompanySettings, changes: Mapping[str, Any]
) -> CompanySettings:
    """
    Shallow patch of `current` with `changes`.

    Only COMPANY_SETTINGS_FIELDS are accepted (TypeError otherwise, like an
    unexpected keyword argument). None leaves a required field unchanged
    and clears `logo`.
    """
    unknown = set(changes) - set(COMPANY_SETTINGS_FIELDS)
    if unknown:
        raise TypeError(f"Unknown company setting(s): {', '.join(sorted(unknown))}")

    if not changes:
        return current

    merged = current.to_dict()
    for name in COMPANY_SETTINGS_FIELDS:
        if name not in changes:
            continue
        value = changes[name]
        if value is None and name in REQUIRED_COMPANY_FIELDS:
            continue
        merged[name] = value
    return CompanySettings(**merged)


# =========================================================
# Storage
# =========================================================
class FileStorage:
    """Key/value string storage, one JSON file per key under `directory`."""

    def __init__(self, directory: str | os.PathLike) -> None:
        self.directory = os.fspath(directory)

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def get_item(self, key: str) -> str | None:
        try:
            with open(self._path(key), "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, self._path(key))
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def remove_item(self, key: str) -> None:
        try:
            os.remove(self._path(key))
        except FileNotFoundError:
            pass


def _read_snapshot(storage: FileStorage, key: str) -> AppState:
    try:
        raw = storage.get_item(key)
    except OSError:
        logger.warning("Could not read app settings snapshot %r; using defaults.", key, exc_info=True)
        return AppState()

    if raw is None:
        return AppState()

    try:
        payload = json.loads(raw)
        state = payload["state"]
        if not isinstance(state, Mapping):
            raise TypeError("snapshot state is not an object")
        return AppState.from_dict(state)
    except (ValueError, KeyError, TypeError):
        logger.warning("Ignoring corrupt app settings snapshot %r; using defaults.", key, exc_info=True)
        return AppState()


# =========================================================
# Store
# =========================================================
class AppSettingsStore:
    """
    Locale + company display settings, persisted across restarts.

    Setters update memory synchronously and notify subscribers before
    returning. With autoflush on, the write to disk is queued on a
    single background worker and not awaited: use wait_for_flush() (or
    flush()) when the snapshot must be on disk.
    """

    def __init__(
        self,
        storage: FileStorage,
        *,
        key: str = SETTINGS_STORAGE_KEY,
        state: AppState | None = None,
        autoflush: bool = True,
    ) -> None:
        self._storage = storage
        self._key = key
        self._state = state if state is not None else AppState()
        self._autoflush = autoflush

        self._lock = threading.RLock()
        self._flush_lock = threading.Lock()
        self._listeners: list[Listener] = []
        self._executor: ThreadPoolExecutor | None = None
        self._pending: Future | None = None

    @classmethod
    def load(
        cls,
        storage: FileStorage,
        *,
        key: str = SETTINGS_STORAGE_KEY,
        autoflush: bool = True,
    ) -> "AppSettingsStore":
        """Persisted snapshot if present, seed defaults otherwise."""
        return cls(storage, key=key, state=_read_snapshot(storage, key), autoflush=autoflush)

    # ---------------------
    # Reads
    # ---------------------
    def get_state(self) -> AppState:
        return self._state

    @property
    def locale(self) -> Locale:
        return self._state.locale

    @property
    def company(self) -> CompanySettings:
        return self._state.company

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener(state, previous_state); returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ---------------------
    # Setters
    # ---------------------
    def set_locale(self, locale: Locale | str) -> AppState:
        """
        Replace the locale.

        Only Locale values (`id`, `en`) are accepted; anything else raises
        ValueError and leaves the state untouched.
        """
        new_locale = Locale(locale)
        return self._set(lambda state: replace(state, locale=new_locale))

    def set_company(self, changes: Mapping[str, Any] | None = None, **fields: Any) -> AppState:
        patch = dict(changes or {})
        patch.update(fields)
        return self._set(
            lambda state: replace(state, company=merge_company_settings(state.company, patch))
        )

    def _set(self, update: Callable[[AppState], AppState]) -> AppState:
        with self._lock:
            previous = self._state
            state = update(previous)
            self._state = state
            # queued before listeners run so a failing listener can't skip the write
            if self._autoflush:
                self._schedule_flush()
            for listener in list(self._listeners):
                listener(state, previous)
        return state

    # ---------------------
    # Persistence
    # ---------------------
    def flush(self) -> None:
        """Write the current snapshot to storage now. Raises on I/O failure."""
        with self._flush_lock:
            payload = json.dumps(
                {"state": self._state.to_dict(), "version": SNAPSHOT_VERSION},
                ensure_ascii=False,
            )
            self._storage.set_item(self._key, payload)

    def _background_flush(self) -> None:
        try:
            self.flush()
        except Exception:
            logger.exception("Failed to persist app settings snapshot %r", self._key)
            raise

    def _schedule_flush(self) -> None:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="settings-flush")
        self._pending = self._executor.submit(self._background_flush)

    def wait_for_flush(self, timeout: float | None = None) -> None:
        """Block until the last queued write finished; re-raises its error."""
        pending = self._pending
        if pending is not None:
            pending.result(timeout=timeout)

    def close(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)


# =========================================================
# Flask wiring
# =========================================================
def init_app_settings(app: Flask) -> AppSettingsStore:
    """
    Build the store for `app` and register it as app.extensions["app_settings"].

    Storage dir priority:
      1) SETTINGS_STORAGE_DIR config/env
      2) instance_path
    """
    directory = app.config.get("SETTINGS_STORAGE_DIR") or app.instance_path
    store = AppSettingsStore.load(
        FileStorage(directory),
        autoflush=bool(app.config.get("SETTINGS_AUTOFLUSH", True)),
    )
    app.extensions["app_settings"] = store
    # join pending writes on interpreter shutdown
    atexit.register(store.close)
    return store


def get_app_settings() -> AppSettingsStore:
    return current_app.extensions["app_settings"]
