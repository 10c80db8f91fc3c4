# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Option value helpers.

An option's identity is the bare name of its concrete class. Most options are
declared as thin subclasses of a builtin::

    class WithUsername(str): ...
    class WithPort(int): ...

Python refuses subclasses of ``bool`` and some payloads are not builtins at
all, so :class:`Option` offers a generic wrapper whose kind is the kind of its
``value``::

    class WithDebug(Option[bool]): ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Option(Generic[T]):
    """Typed wrapper carrying an option payload under its own class name."""

    value: T


def option_name(value: object) -> str:
    """Return the unqualified class name used to match ``value`` to a field."""
    return type(value).__name__


def unwrap(value: object) -> object:
    """Return the payload of an :class:`Option`, or ``value`` unchanged."""
    if isinstance(value, Option):
        return value.value
    return value


__all__ = ["Option", "option_name", "unwrap"]
