"""Value kinds, failure policies and the string codecs behind them.

Every value crosses the store as a plain string.  Each kind owns three
small functions:

* ``coerce``: strict write-side parse of an untyped input.
* ``serialize``: typed value → storage string.
* ``deserialize``: storage string → typed value.

None of them touch the store, so they can be exercised on their own.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from enum import StrEnum
from typing import Any, NamedTuple

from service_variables.exceptions import InvalidValueError

_INTEGER_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

TRUE_TOKEN = "true"
FALSE_TOKEN = "false"


class OptionKind(StrEnum):
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"


class FailurePolicy(StrEnum):
    """How a read answers when the backing store is unreachable."""

    RAISE = "raise"
    USE_DEFAULT = "use_default"
    USE_LAST_VALUE = "use_last_value"

    @classmethod
    def parse(cls, value: Any) -> FailurePolicy:
        """Resolve *value* to a policy, raising :class:`InvalidValueError` if unknown.

        ``"raise_exception"`` is accepted as an alias of ``"raise"``.
        """
        if isinstance(value, cls):
            return value
        if value == "raise_exception":
            return cls.RAISE
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise InvalidValueError(
                f"Unknown failure policy {value!r}. Expected one of: {allowed}"
            ) from None


# ── boolean ──────────────────────────────────────────────────


def coerce_boolean(value: Any) -> bool:
    if value is True or value == TRUE_TOKEN:
        return True
    if value is False or value == FALSE_TOKEN:
        return False
    raise InvalidValueError("Value isn't `true` or `false`")


def serialize_boolean(value: bool) -> str:
    return TRUE_TOKEN if value else FALSE_TOKEN


def deserialize_boolean(raw: str) -> bool:
    # Anything other than the exact true token reads as false.
    return raw == TRUE_TOKEN


# ── integer ──────────────────────────────────────────────────


def coerce_integer(value: Any) -> int:
    try:
        result = _parse_integer(value)
        # Must survive the int <-> str digit limit in both directions.
        str(result)
    except (ValueError, OverflowError):
        raise InvalidValueError("not a number") from None
    return result


def _parse_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidValueError("not a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_RE.fullmatch(text):
            return int(text)
    raise InvalidValueError("not a number")


def serialize_integer(value: int) -> str:
    return str(value)


def deserialize_integer(raw: str) -> int:
    return int(raw)


# ── float ────────────────────────────────────────────────────


def coerce_float(value: Any) -> float:
    try:
        return _parse_float(value)
    except (ValueError, OverflowError):
        raise InvalidValueError("not a number") from None


def _parse_float(value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidValueError("not a number")
    if isinstance(value, int):
        return float(value)
    if isinstance(value, float):
        if math.isfinite(value):
            return value
        raise InvalidValueError("not a number")
    if isinstance(value, str):
        text = value.strip()
        if _FLOAT_RE.fullmatch(text):
            result = float(text)
            if math.isfinite(result):
                return result
    raise InvalidValueError("not a number")


def serialize_float(value: float) -> str:
    return repr(value)


def deserialize_float(raw: str) -> float:
    return float(raw)


# ── string ───────────────────────────────────────────────────


def coerce_string(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidValueError(f"Value isn't a string: {value!r}")
    return value


def _identity(value: str) -> str:
    return value


class Codec(NamedTuple):
    coerce: Callable[[Any], Any]
    serialize: Callable[[Any], str]
    deserialize: Callable[[str], Any]


CODECS: dict[OptionKind, Codec] = {
    OptionKind.BOOLEAN: Codec(coerce_boolean, serialize_boolean, deserialize_boolean),
    OptionKind.INTEGER: Codec(coerce_integer, serialize_integer, deserialize_integer),
    OptionKind.FLOAT: Codec(coerce_float, serialize_float, deserialize_float),
    OptionKind.STRING: Codec(coerce_string, _identity, _identity),
}
