"""Namespace — the central object applications declare their variables on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from service_variables.exceptions import InvalidDefinitionError
from service_variables.gateway import StoreGateway
from service_variables.kinds import FailurePolicy, OptionKind
from service_variables.options import Option, OptionSpec

if TYPE_CHECKING:
    from service_variables.stores.base import HashStore

logger = structlog.get_logger(__name__)


class Namespace:
    """A group of options sharing one storage key and one store handle.

    Typical use::

        flags = Namespace()
        flags.configure(RedisHashStore.from_url(url), failure_policy="use_last_value")
        batch_size = flags.integer_option("batch_size", default=5, min=1, max=10)

        batch_size.set(8)
        batch_size.get()          # -> 8
        flags.get("batch_size")   # -> 8

    Options may be declared before :meth:`configure` is called, but every
    read or write on an unconfigured namespace raises
    :class:`NotConfiguredError`.

    Parameters:
        store:          Optional store handle.  Without one the namespace stays
                        unconfigured until :meth:`configure` is called.
        key_suffix:     Appended to the default storage key.
        failure_policy: Namespace-wide default read failure policy.
    """

    def __init__(
        self,
        store: HashStore | None = None,
        *,
        key_suffix: str | None = None,
        failure_policy: FailurePolicy | str = FailurePolicy.RAISE,
    ) -> None:
        self._gateway = StoreGateway()
        self._options: dict[str, Option] = {}
        self.configure(store, key_suffix=key_suffix, failure_policy=failure_policy)

    # ── configuration ────────────────────────────────────────

    def configure(
        self,
        store: HashStore | None,
        key_suffix: str | None = None,
        failure_policy: FailurePolicy | str = FailurePolicy.RAISE,
    ) -> None:
        """Set (or reset) the store handle, key suffix and default policy.

        Calling this again fully replaces the previous configuration and
        forgets every last-known value.  Declared options are kept.

        Raises:
            InvalidValueError: If *failure_policy* is not a known policy.
        """
        self._gateway.configure(store, key_suffix=key_suffix, failure_policy=failure_policy)

    @property
    def configured(self) -> bool:
        return self._gateway.configured

    @property
    def storage_key(self) -> str:
        return self._gateway.storage_key

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._gateway.failure_policy

    @property
    def gateway(self) -> StoreGateway:
        return self._gateway

    # ── declaration ──────────────────────────────────────────

    def declare(
        self,
        name: str,
        kind: OptionKind | str,
        default: Any = None,
        *,
        min: int | float | None = None,
        max: int | float | None = None,
        enum: list[str] | tuple[str, ...] | None = None,
        failure_policy: FailurePolicy | str | None = None,
    ) -> Option:
        """Register an option and return its bound accessor.

        No store access happens here.

        Raises:
            InvalidDefinitionError: If *name* is already declared or the
                constraints contradict each other.
        """
        if name in self._options:
            raise InvalidDefinitionError(name, "already declared in this namespace")
        spec = OptionSpec.build(
            name,
            kind,
            default,
            min=min,
            max=max,
            enum=enum,
            failure_policy=failure_policy,
        )
        option = Option(spec, self._gateway)
        self._options[name] = option
        logger.debug("option declared", storage_key=self.storage_key, **spec.export())
        return option

    def boolean_option(
        self,
        name: str,
        default: bool | None = None,
        *,
        failure_policy: FailurePolicy | str | None = None,
    ) -> Option:
        return self.declare(name, OptionKind.BOOLEAN, default, failure_policy=failure_policy)

    def integer_option(
        self,
        name: str,
        default: int | None = None,
        *,
        min: int | None = None,
        max: int | None = None,
        failure_policy: FailurePolicy | str | None = None,
    ) -> Option:
        return self.declare(
            name, OptionKind.INTEGER, default, min=min, max=max, failure_policy=failure_policy
        )

    def float_option(
        self,
        name: str,
        default: float | None = None,
        *,
        min: float | None = None,
        max: float | None = None,
        failure_policy: FailurePolicy | str | None = None,
    ) -> Option:
        return self.declare(
            name, OptionKind.FLOAT, default, min=min, max=max, failure_policy=failure_policy
        )

    def string_option(
        self,
        name: str,
        default: str | None = None,
        *,
        enum: list[str] | tuple[str, ...] | None = None,
        failure_policy: FailurePolicy | str | None = None,
    ) -> Option:
        return self.declare(
            name, OptionKind.STRING, default, enum=enum, failure_policy=failure_policy
        )

    # ── access by name ───────────────────────────────────────

    def option(self, name: str) -> Option:
        """Return the accessor for *name*.  Raises ``KeyError`` if undeclared."""
        try:
            return self._options[name]
        except KeyError:
            raise KeyError(f"No option named '{name}' in namespace '{self.storage_key}'") from None

    def get(self, name: str) -> Any:
        return self.option(name).get()

    def set(self, name: str, value: Any) -> None:
        self.option(name).set(value)

    def clear(self, name: str) -> None:
        """Delete the stored value so *name* reads as its default again."""
        self.option(name).clear()

    # ── introspection ────────────────────────────────────────

    def options(self) -> list[str]:
        """Return the declared option names in declaration order."""
        return list(self._options)

    def spec(self, name: str) -> OptionSpec:
        return self.option(name).spec

    def __contains__(self, name: object) -> bool:
        return name in self._options

    def export(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot of the configuration and options."""
        options = [option.spec.export() for option in self._options.values()]
        return {
            "storage_key": self.storage_key,
            "key_suffix": self._gateway.key_suffix,
            "failure_policy": self.failure_policy.value,
            "configured": self.configured,
            "options": options,
            "option_count": len(options),
        }
