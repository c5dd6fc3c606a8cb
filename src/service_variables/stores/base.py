"""HashStore protocol — the key → field → string map behind every namespace."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from service_variables.exceptions import StoreConnectionError


class HashStore(ABC):
    """Abstract base for all hash-store backends.

    A namespace keeps all of its options as fields of one hash stored under
    its *storage key*.  Values are always strings; typing is the caller's
    job.

    Any operation may fail because the store is unreachable.  Backends
    list the exception classes that signal this in ``connection_errors`` so
    the gateway can tell "unreachable" apart from every other failure.
    """

    connection_errors: ClassVar[tuple[type[BaseException], ...]] = (StoreConnectionError,)

    @abstractmethod
    def hash_get(self, key: str, field: str) -> str | None:
        """Return the field's value, or ``None`` if it is absent."""
        ...

    @abstractmethod
    def hash_set(self, key: str, field: str, value: str) -> None:
        """Create or overwrite a field."""
        ...

    @abstractmethod
    def hash_delete(self, key: str, field: str) -> None:
        """Delete a field.  No-op if it does not exist."""
        ...
