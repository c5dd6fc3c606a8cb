"""Storage backends for service variables."""

from service_variables.stores.base import HashStore
from service_variables.stores.memory import InMemoryHashStore
from service_variables.stores.redis import RedisHashStore

__all__ = ["HashStore", "InMemoryHashStore", "RedisHashStore"]
