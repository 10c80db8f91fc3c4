# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised by option extraction."""

from __future__ import annotations


class OptionsError(Exception):
    """Base class for every error raised while extracting options."""


class NotAStructError(OptionsError):
    """Raised when the destination is not a dataclass or pydantic model instance."""

    def __init__(self, message: str = "dest must be a struct") -> None:
        super().__init__(message)


class FrozenDestinationError(NotAStructError):
    """Raised when the destination record cannot be mutated in place."""

    def __init__(self) -> None:
        super().__init__("dest must be a mutable struct")


class DuplicateOptionNameError(OptionsError):
    """Raised when two fields of one record declare the same option name."""

    def __init__(self, option_name: str) -> None:
        super().__init__(f"option name {option_name} has multiple tagged fields")
        self.option_name = option_name


class UnknownOptionError(OptionsError):
    """Raised in strict mode when no field accepts an option."""

    def __init__(self, option_name: str) -> None:
        super().__init__(f"invalid option {option_name}")
        self.option_name = option_name


class TypeMismatchError(OptionsError):
    """Raised when an option value cannot be fitted into its matched field."""

    def __init__(self, option_name: str, field_kind: str, value_kind: str) -> None:
        super().__init__(f"failed to set {option_name} when fitting {field_kind} into {value_kind}")
        self.option_name = option_name
        self.field_kind = field_kind
        self.value_kind = value_kind


__all__ = [
    "DuplicateOptionNameError",
    "FrozenDestinationError",
    "NotAStructError",
    "OptionsError",
    "TypeMismatchError",
    "UnknownOptionError",
]
