from .state_repository import (
    InMemoryStateRepository,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    PersistentStateRepository,
    StateRepository,
    dump_state_blob,
    load_state_blob,
)
from .outreach_store import OutreachStore

__all__ = [
    "InMemoryStateRepository",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "PersistentStateRepository",
    "StateRepository",
    "dump_state_blob",
    "load_state_blob",
    "OutreachStore",
]
