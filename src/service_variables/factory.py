# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Builds configured namespaces from declarative configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from service_variables.exceptions import InvalidDefinitionError, ServiceVariablesError
from service_variables.namespace import Namespace
from service_variables.schema import NamespaceConfigSchema

if TYPE_CHECKING:
    from service_variables.stores.base import HashStore


class NamespaceFactory:
    """Creates :class:`Namespace` instances from :class:`NamespaceConfigSchema`.

    Example:
        config = NamespaceConfigSchema(
            key_suffix="billing",
            failure_policy="use_last_value",
            options=[
                OptionConfigSchema(name="retries", kind="integer", default=3, min=0, max=10),
                OptionConfigSchema(name="mode", kind="string", enum=["fast", "safe"]),
            ],
        )
        billing = NamespaceFactory.build(config, store)
    """

    @staticmethod
    def build(config: NamespaceConfigSchema, store: HashStore | None) -> Namespace:
        """Configure a namespace and declare every option in order.

        Raises:
            InvalidValueError: If the namespace failure policy is unknown.
            InvalidDefinitionError: If any option declaration is rejected.
        """
        namespace = Namespace()
        namespace.configure(
            store,
            key_suffix=config.key_suffix,
            failure_policy=config.failure_policy,
        )

        for option in config.options:
            try:
                namespace.declare(
                    option.name,
                    option.kind,
                    option.default,
                    min=option.min,
                    max=option.max,
                    enum=option.enum,
                    failure_policy=option.failure_policy,
                )
            except ServiceVariablesError:
                raise
            except Exception as e:
                raise InvalidDefinitionError(option.name, str(e)) from e

        return namespace

    @classmethod
    def from_json(cls, raw: str | bytes, store: HashStore | None) -> Namespace:
        """Validate *raw* JSON against the schema, then :meth:`build` it."""
        try:
            config = NamespaceConfigSchema.model_validate_json(raw)
        except ValidationError as e:
            raise InvalidDefinitionError("<namespace>", str(e)) from e
        return cls.build(config, store)
