"""InMemoryHashStore — zero-config, dict-backed storage for development and testing."""

from __future__ import annotations

from collections import defaultdict

from service_variables.stores.base import HashStore


class InMemoryHashStore(HashStore):
    """In-memory store using nested dicts.  Data is lost on process exit."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, str]] = defaultdict(dict)

    def hash_get(self, key: str, field: str) -> str | None:
        return self._data[key].get(field)

    def hash_set(self, key: str, field: str, value: str) -> None:
        self._data[key][field] = value

    def hash_delete(self, key: str, field: str) -> None:
        self._data[key].pop(field, None)

    def snapshot(self, key: str) -> dict[str, str]:
        """Return a copy of every field stored under *key*."""
        return dict(self._data.get(key, {}))
