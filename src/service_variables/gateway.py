"""StoreGateway — the only component that talks to the backing store."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import structlog

from service_variables.exceptions import NotConfiguredError
from service_variables.kinds import FailurePolicy

if TYPE_CHECKING:
    from service_variables.stores.base import HashStore

logger = structlog.get_logger(__name__)

DEFAULT_STORAGE_KEY = "service_variables_redis_key"


def storage_key_for(key_suffix: str | None) -> str:
    """Return the physical hash key for a namespace with the given suffix."""
    if key_suffix is None:
        return DEFAULT_STORAGE_KEY
    return f"{DEFAULT_STORAGE_KEY}:{key_suffix}"


class StoreGateway:
    """Maps a namespace's fields onto one hash and shields reads from outages.

    Reads go through a :class:`FailurePolicy`:

    * ``raise``: the store's connectivity error propagates unchanged.
    * ``use_default``: the read answers "absent", so the caller's default
      applies.
    * ``use_last_value``: the read answers with the last value this process
      wrote or read for the field, or "absent" if none.

    Writes and deletes are never shielded.

    The last-known-value cache holds storage strings and is updated after
    every successful read, write and delete.  It is guarded by a lock so
    the gateway can be shared between threads.  A read only updates the
    cache if no configure() and no write to the same field happened while
    it was talking to the store.
    """

    def __init__(self) -> None:
        self._store: HashStore | None = None
        self._key_suffix: str | None = None
        self._failure_policy = FailurePolicy.RAISE
        self._last_known: dict[str, str] = {}
        self._write_counts: dict[str, int] = {}
        self._generation = 0
        self._lock = threading.RLock()

    # ── configuration ────────────────────────────────────────

    def configure(
        self,
        store: HashStore | None,
        key_suffix: str | None = None,
        failure_policy: FailurePolicy | str = FailurePolicy.RAISE,
    ) -> None:
        """Replace the store handle, suffix and default policy; wipe the cache.

        A ``None`` store leaves the gateway unconfigured.

        Raises:
            InvalidValueError: If *failure_policy* is not a known policy.
        """
        policy = FailurePolicy.parse(failure_policy)
        with self._lock:
            self._store = store
            self._key_suffix = key_suffix
            self._failure_policy = policy
            self._last_known = {}
            self._write_counts = {}
            self._generation += 1
        logger.debug(
            "gateway configured",
            storage_key=self.storage_key,
            failure_policy=policy.value,
        )

    @property
    def configured(self) -> bool:
        return self._store is not None

    @property
    def storage_key(self) -> str:
        return storage_key_for(self._key_suffix)

    @property
    def key_suffix(self) -> str | None:
        return self._key_suffix

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    def ensure_configured(self) -> None:
        """Raise :class:`NotConfiguredError` unless a store handle is set."""
        self._require_store()

    def _require_store(self) -> HashStore:
        if self._store is None:
            raise NotConfiguredError()
        return self._store

    # ── operations ───────────────────────────────────────────

    def read(self, field: str, failure_policy: FailurePolicy | None = None) -> str | None:
        """Return the raw string stored for *field*, or ``None`` if absent.

        *failure_policy* defaults to the namespace-wide policy.
        """
        with self._lock:
            store = self._require_store()
            key = self.storage_key
            policy = failure_policy or self._failure_policy
            stamp = self._stamp(field)
        try:
            raw = store.hash_get(key, field)
        except store.connection_errors as exc:
            if policy is FailurePolicy.RAISE:
                raise
            return self._fallback(key, field, policy, exc)

        with self._lock:
            # A configure() or a write to this field since the snapshot wins.
            if self._stamp(field) == stamp:
                self._remember(field, raw)
        return raw

    def write(self, field: str, value: str) -> None:
        """Store *value* under *field*.  Connectivity errors always propagate."""
        with self._lock:
            store = self._require_store()
            key = self.storage_key
            generation = self._generation
        store.hash_set(key, field, value)
        self._record_write(field, value, generation)

    def delete(self, field: str) -> None:
        """Remove *field* so that it reads as absent."""
        with self._lock:
            store = self._require_store()
            key = self.storage_key
            generation = self._generation
        store.hash_delete(key, field)
        self._record_write(field, None, generation)

    def last_known(self, field: str) -> str | None:
        """Return the cached last-known value for *field* (diagnostics only)."""
        with self._lock:
            return self._last_known.get(field)

    # ── internals ────────────────────────────────────────────

    def _stamp(self, field: str) -> tuple[int, int]:
        return self._generation, self._write_counts.get(field, 0)

    def _record_write(self, field: str, raw: str | None, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._write_counts[field] = self._write_counts.get(field, 0) + 1
            self._remember(field, raw)

    def _remember(self, field: str, raw: str | None) -> None:
        with self._lock:
            if raw is None:
                self._last_known.pop(field, None)
            else:
                self._last_known[field] = raw

    def _fallback(
        self, key: str, field: str, policy: FailurePolicy, exc: BaseException
    ) -> str | None:
        if policy is FailurePolicy.USE_LAST_VALUE:
            with self._lock:
                raw = self._last_known.get(field)
        else:
            raw = None
        logger.warning(
            "store unreachable, serving fallback",
            storage_key=key,
            field=field,
            failure_policy=policy.value,
            has_value=raw is not None,
            error=str(exc),
        )
        return raw
