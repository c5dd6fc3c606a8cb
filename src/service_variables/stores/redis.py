"""RedisHashStore — production backend on top of a ``redis.Redis`` client."""

from __future__ import annotations

from typing import Any, ClassVar

import redis as redis_lib
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from service_variables.exceptions import StoreConnectionError
from service_variables.stores.base import HashStore


class RedisHashStore(HashStore):
    """Stores each namespace as a Redis hash (``HGET`` / ``HSET`` / ``HDEL``).

    Connection and timeout errors raised by the client are left untouched,
    so a namespace using the ``raise`` policy surfaces the native
    ``redis`` exception to its caller.

    Parameters:
        client: A ready ``redis.Redis`` instance.  Both ``decode_responses``
                modes are supported.
    """

    connection_errors: ClassVar[tuple[type[BaseException], ...]] = (
        RedisConnectionError,
        RedisTimeoutError,
        StoreConnectionError,
    )

    def __init__(self, client: redis_lib.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str = "redis://localhost:6379/0", **kwargs: Any) -> RedisHashStore:
        """Build a store from a connection URL.  Extra kwargs go to ``redis.from_url``."""
        kwargs.setdefault("decode_responses", True)
        return cls(redis_lib.from_url(url, **kwargs))

    @property
    def client(self) -> redis_lib.Redis:
        return self._client

    def hash_get(self, key: str, field: str) -> str | None:
        raw = self._client.hget(key, field)
        if isinstance(raw, bytes):
            return raw.decode("utf-8")
        return raw

    def hash_set(self, key: str, field: str, value: str) -> None:
        self._client.hset(key, field, value)

    def hash_delete(self, key: str, field: str) -> None:
        self._client.hdel(key, field)
