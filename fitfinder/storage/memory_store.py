"""In-memory key-value store, used for tests and the API's default mode."""

from typing import Dict, Optional

from fitfinder.storage.key_value_store import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Store that keeps serialized values in a dict for the process lifetime."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get_raw(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set_raw(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)
