"""Shared test fixtures."""

import pytest

from service_variables import Namespace, StoreConnectionError
from service_variables.stores import InMemoryHashStore


class FlakyHashStore(InMemoryHashStore):
    """In-memory store that can be switched into an outage."""

    def __init__(self) -> None:
        super().__init__()
        self.reads_down = False
        self.writes_down = False

    def hash_get(self, key, field):
        if self.reads_down:
            raise StoreConnectionError("hash_get", "simulated outage")
        return super().hash_get(key, field)

    def hash_set(self, key, field, value):
        if self.writes_down:
            raise StoreConnectionError("hash_set", "simulated outage")
        super().hash_set(key, field, value)

    def hash_delete(self, key, field):
        if self.writes_down:
            raise StoreConnectionError("hash_delete", "simulated outage")
        super().hash_delete(key, field)


@pytest.fixture
def store():
    return FlakyHashStore()


@pytest.fixture
def ns(store):
    """A namespace with one option of every kind."""
    namespace = Namespace(store)
    namespace.boolean_option("bool", default=True)
    namespace.integer_option("int", default=5, min=1, max=10)
    namespace.float_option("float", default=3.9, min=1.2, max=9.3)
    namespace.string_option("string", default="string 0", enum=["string 0", "string 1"])
    namespace.string_option("string2", default="string")
    return namespace
