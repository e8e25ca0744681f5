"""
State Repository
Holder of the single AppState, plus the persistence layer around it.

Key patterns:
- StateRepository is get/set/subscribe only; mutators live in OutreachStore
- Persistence is a decorator (PersistentStateRepository), not a side effect
  baked into every mutator, so tests can run on the plain in-memory repo
- The blob is versioned: {"version": 1, "state": {...camelCase...}}
"""
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError

from prnow.modules.outreach.models import AppState
from prnow.shared.core.constants import STATE_SCHEMA_VERSION
from prnow.shared.utils.json_utils import safe_json_parse

logger = logging.getLogger("state_repository")

StateListener = Callable[[AppState], None]


# ============================================
# KEY-VALUE BLOB STORAGE
# ============================================

class KeyValueStorage(ABC):
    """Opaque string blobs by key, read and written wholesale."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        ...


class InMemoryStorage(KeyValueStorage):

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def write(self, key: str, value: str) -> None:
        self.items[key] = value


class JsonFileStorage(KeyValueStorage):
    """One `<key>.json` file per key under `directory`."""

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Write-then-rename so a crash never leaves half a blob behind
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(value)
            os.replace(tmp_path, self._path(key))
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise


# ============================================
# STATE REPOSITORIES
# ============================================

class StateRepository(ABC):

    @abstractmethod
    def get(self) -> AppState:
        ...

    @abstractmethod
    def set(self, state: AppState) -> None:
        ...

    @abstractmethod
    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a change listener; returns a function that unsubscribes it."""
        ...


class InMemoryStateRepository(StateRepository):

    def __init__(self, initial: Optional[AppState] = None):
        self._state = initial or AppState()
        self._listeners: List[StateListener] = []
        self._lock = threading.RLock()

    def get(self) -> AppState:
        return self._state

    def set(self, state: AppState) -> None:
        with self._lock:
            self._state = state
            listeners = list(self._listeners)
        for listener in listeners:
            listener(state)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe


def dump_state_blob(state: AppState) -> str:
    return json.dumps({"version": STATE_SCHEMA_VERSION, "state": state.to_json_dict()})


def load_state_blob(raw: Optional[str]) -> Optional[AppState]:
    """
    Decode a persisted blob. Returns None (start empty) for a missing,
    corrupt or unknown-version blob; nothing is migrated.
    """
    blob = safe_json_parse(raw, default=None)
    if blob is None:
        if raw:
            logger.warning("Persisted state is not valid JSON - starting empty")
        return None

    if not isinstance(blob, dict) or blob.get("version") != STATE_SCHEMA_VERSION:
        version = blob.get("version") if isinstance(blob, dict) else None
        logger.warning(f"Unsupported persisted state version {version!r} - starting empty")
        return None

    try:
        return AppState.model_validate(blob.get("state") or {})
    except ValidationError as e:
        logger.warning(f"Persisted state failed validation ({e.error_count()} errors) - starting empty")
        return None


class PersistentStateRepository(StateRepository):
    """
    Wraps another repository: hydrates it from storage once, then writes the
    whole blob after every set().
    """

    def __init__(self, inner: StateRepository, storage: KeyValueStorage, key: str):
        self._inner = inner
        self._storage = storage
        self._key = key

        restored = load_state_blob(storage.read(key))
        if restored is not None:
            inner.set(restored)
            logger.info(
                f"Restored state '{key}': {len(restored.outlets)} outlets, "
                f"{len(restored.contacts)} contacts, {len(restored.emails)} emails, "
                f"{len(restored.campaigns)} campaigns"
            )

    def get(self) -> AppState:
        return self._inner.get()

    def set(self, state: AppState) -> None:
        # Storage first: a failed write must leave the live state untouched
        self._storage.write(self._key, dump_state_blob(state))
        self._inner.set(state)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self._inner.subscribe(listener)
