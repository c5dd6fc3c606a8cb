"""service_variables — typed, validated variables kept in a remote hash store.

Declare options on a :class:`Namespace`, then read and write them through
the returned accessors.  Reads can survive store outages through a
configurable failure policy.
"""

from service_variables.exceptions import (
    CorruptValueError,
    InvalidDefinitionError,
    InvalidValueError,
    NotConfiguredError,
    ServiceVariablesError,
    StoreConnectionError,
)
from service_variables.factory import NamespaceFactory
from service_variables.gateway import DEFAULT_STORAGE_KEY, StoreGateway
from service_variables.kinds import FailurePolicy, OptionKind
from service_variables.namespace import Namespace
from service_variables.options import Option, OptionSpec
from service_variables.schema import NamespaceConfigSchema, OptionConfigSchema

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "CorruptValueError",
    "FailurePolicy",
    "InvalidDefinitionError",
    "InvalidValueError",
    "Namespace",
    "NamespaceConfigSchema",
    "NamespaceFactory",
    "NotConfiguredError",
    "Option",
    "OptionConfigSchema",
    "OptionKind",
    "OptionSpec",
    "ServiceVariablesError",
    "StoreConnectionError",
    "StoreGateway",
]
