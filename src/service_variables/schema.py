# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Declarative namespace configuration.

These Pydantic models let an application describe a namespace and its
options as data (a JSON document, a settings file section) instead of
a sequence of ``declare`` calls.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class OptionConfigSchema(BaseModel):
    """Single option declaration.

    Attributes:
        name: Field name, unique within the namespace
        kind: "boolean", "integer", "float" or "string"
        default: Value returned while the field is absent
        min: Inclusive lower bound for numeric options
        max: Inclusive upper bound for numeric options
        enum: Allowed values for string options
        failure_policy: Per-option override of the namespace policy
    """

    name: str
    kind: str
    default: Any = None
    min: int | float | None = None
    max: int | float | None = None
    enum: list[str] | None = None
    failure_policy: str | None = None


class NamespaceConfigSchema(BaseModel):
    """A namespace and the options declared on it.

    Attributes:
        key_suffix: Appended to the default storage key
        failure_policy: Default read failure policy
        options: Option declarations, in declaration order
    """

    key_suffix: str | None = None
    failure_policy: str = "raise"
    options: list[OptionConfigSchema] = Field(default_factory=list)
