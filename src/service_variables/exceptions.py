"""Custom exceptions for the service_variables package."""

from __future__ import annotations


class ServiceVariablesError(Exception):
    """Base exception for all service-variable errors."""


class NotConfiguredError(ServiceVariablesError):
    """Raised when a namespace is used before a store has been configured."""

    def __init__(self, message: str = "Store client not given.") -> None:
        super().__init__(message)


class InvalidDefinitionError(ServiceVariablesError):
    """Raised when an option declaration is duplicated or self-contradictory."""

    def __init__(self, option_name: str, message: str) -> None:
        self.option_name = option_name
        super().__init__(f"Option '{option_name}' is invalid: {message}")


class InvalidValueError(ServiceVariablesError):
    """Raised when a value fails coercion or a declared constraint."""


class CorruptValueError(ServiceVariablesError):
    """Raised when a stored string cannot be parsed as its option's kind."""

    def __init__(self, option_name: str, raw: str) -> None:
        self.option_name = option_name
        self.raw = raw
        super().__init__(f"Stored value for '{option_name}' is corrupt: {raw!r}")


class StoreConnectionError(ServiceVariablesError):
    """Raised by a store adapter when the backing store is unreachable."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Store unreachable during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
