"""OptionSpec and Option — a declared variable and its bound accessor pair."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from service_variables.exceptions import (
    CorruptValueError,
    InvalidDefinitionError,
    InvalidValueError,
)
from service_variables.kinds import CODECS, FailurePolicy, OptionKind

if TYPE_CHECKING:
    from service_variables.gateway import StoreGateway


@dataclass(frozen=True)
class OptionSpec:
    """Immutable description of one declared option.

    Attributes:
        name:           Field name inside the namespace's hash.
        kind:           Value kind; selects the codec.
        default:        Returned when the field is absent.  May be ``None``.
        min:            Inclusive lower bound (integer / float only).
        max:            Inclusive upper bound (integer / float only).
        enum:           Allowed values (string only).
        failure_policy: Per-option override of the namespace default.
    """

    name: str
    kind: OptionKind
    default: Any = None
    min: int | float | None = None
    max: int | float | None = None
    enum: tuple[str, ...] | None = None
    failure_policy: FailurePolicy | None = None

    # ── construction ─────────────────────────────────────────

    @classmethod
    def build(
        cls,
        name: str,
        kind: OptionKind | str,
        default: Any = None,
        *,
        min: int | float | None = None,
        max: int | float | None = None,
        enum: list[str] | tuple[str, ...] | None = None,
        failure_policy: FailurePolicy | str | None = None,
    ) -> OptionSpec:
        """Validate a declaration and return the resulting spec.

        Raises:
            InvalidDefinitionError: If any part of the declaration is
                inconsistent.
        """
        if not isinstance(name, str) or not name:
            raise InvalidDefinitionError(str(name), "name must be a non-empty string")

        try:
            resolved_kind = OptionKind(kind)
        except ValueError:
            raise InvalidDefinitionError(name, f"unknown kind {kind!r}") from None

        policy: FailurePolicy | None = None
        if failure_policy is not None:
            try:
                policy = FailurePolicy.parse(failure_policy)
            except InvalidValueError as exc:
                raise InvalidDefinitionError(name, str(exc)) from None

        numeric = resolved_kind in (OptionKind.INTEGER, OptionKind.FLOAT)
        if not numeric and (min is not None or max is not None):
            raise InvalidDefinitionError(name, f"min/max do not apply to {resolved_kind} options")
        for label, bound in (("min", min), ("max", max)):
            if bound is not None and not _is_number(bound):
                raise InvalidDefinitionError(name, f"{label} must be a number, got {bound!r}")
        if min is not None and max is not None and min > max:
            raise InvalidDefinitionError(name, f"min ({min}) is greater than max ({max})")

        enum_values: tuple[str, ...] | None = None
        if enum is not None:
            if resolved_kind is not OptionKind.STRING:
                raise InvalidDefinitionError(name, "enum only applies to string options")
            enum_values = tuple(enum)
            if not enum_values:
                raise InvalidDefinitionError(name, "enum must list at least one value")
            if not all(isinstance(v, str) for v in enum_values):
                raise InvalidDefinitionError(name, "enum values must be strings")

        if default is not None and not _matches_kind(resolved_kind, default):
            raise InvalidDefinitionError(
                name, f"default {default!r} does not match kind '{resolved_kind.value}'"
            )
        if resolved_kind is OptionKind.FLOAT and default is not None:
            try:
                default = float(default)
            except OverflowError:
                raise InvalidDefinitionError(
                    name, f"default {default!r} is out of float range"
                ) from None

        return cls(
            name=name,
            kind=resolved_kind,
            default=default,
            min=min,
            max=max,
            enum=enum_values,
            failure_policy=policy,
        )

    # ── value handling ───────────────────────────────────────

    def validate(self, value: Any) -> Any:
        """Coerce *value* and check it against the constraints.

        Returns the typed value.  Raises :class:`InvalidValueError`.
        """
        codec = CODECS[self.kind]
        typed = codec.coerce(value)

        if self.kind in (OptionKind.INTEGER, OptionKind.FLOAT):
            if self.min is not None and typed < self.min:
                raise InvalidValueError(f"Value too small. min = {self._format_bound(self.min)}")
            if self.max is not None and typed > self.max:
                raise InvalidValueError(f"Value too large. max = {self._format_bound(self.max)}")

        if self.enum is not None and typed not in self.enum:
            raise InvalidValueError(f"Only {list(self.enum)} values are allowed.")

        return typed

    def serialize(self, typed: Any) -> str:
        return CODECS[self.kind].serialize(typed)

    def deserialize(self, raw: str) -> Any:
        try:
            return CODECS[self.kind].deserialize(raw)
        except ValueError:
            raise CorruptValueError(self.name, raw) from None

    def _format_bound(self, bound: int | float) -> str:
        if self.kind is OptionKind.INTEGER:
            return str(int(bound))
        return str(float(bound))

    def export(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "default": self.default,
            "min": self.min,
            "max": self.max,
            "enum": list(self.enum) if self.enum is not None else None,
            "failure_policy": self.failure_policy.value if self.failure_policy else None,
        }


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _matches_kind(kind: OptionKind, value: Any) -> bool:
    if kind is OptionKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is OptionKind.STRING:
        return isinstance(value, str)
    if kind is OptionKind.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    return _is_number(value)


class Option:
    """Reader/writer pair bound to one :class:`OptionSpec` and its gateway.

    Returned by :meth:`Namespace.declare`; hold on to it for typed call
    sites, or go through ``namespace.get(name)`` / ``namespace.set(name, v)``.
    """

    def __init__(self, spec: OptionSpec, gateway: StoreGateway) -> None:
        self._spec = spec
        self._gateway = gateway

    @property
    def spec(self) -> OptionSpec:
        return self._spec

    @property
    def name(self) -> str:
        return self._spec.name

    @property
    def failure_policy(self) -> FailurePolicy:
        """The policy in force for this option right now."""
        return self._spec.failure_policy or self._gateway.failure_policy

    def get(self) -> Any:
        raw = self._gateway.read(self._spec.name, self.failure_policy)
        if raw is None:
            return self._spec.default
        return self._spec.deserialize(raw)

    def set(self, value: Any) -> None:
        """Validate and persist *value*.  ``None`` clears the field."""
        self._gateway.ensure_configured()
        if value is None:
            self._gateway.delete(self._spec.name)
            return
        typed = self._spec.validate(value)
        self._gateway.write(self._spec.name, self._spec.serialize(typed))

    def clear(self) -> None:
        self.set(None)

    def __repr__(self) -> str:
        return f"Option(name={self._spec.name!r}, kind={self._spec.kind.value!r})"
