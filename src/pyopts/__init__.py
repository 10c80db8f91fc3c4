# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fill configuration records from typed option values matched by class name."""

from __future__ import annotations

from importlib import metadata

from .errors import (
    DuplicateOptionNameError,
    FrozenDestinationError,
    NotAStructError,
    OptionsError,
    TypeMismatchError,
    UnknownOptionError,
)
from .extract import Extractor, extract, must_extract
from .fields import (
    OPTNAME_TAG,
    FieldBinding,
    OptName,
    binding_map,
    clear_binding_cache,
    collect_bindings,
    option_field,
    option_model_field,
)
from .options import Option, option_name
from .settings import ExtractorSettings

__all__ = [
    "OPTNAME_TAG",
    "DuplicateOptionNameError",
    "Extractor",
    "ExtractorSettings",
    "FieldBinding",
    "FrozenDestinationError",
    "NotAStructError",
    "OptName",
    "Option",
    "OptionsError",
    "TypeMismatchError",
    "UnknownOptionError",
    "__version__",
    "binding_map",
    "clear_binding_cache",
    "collect_bindings",
    "extract",
    "must_extract",
    "option_field",
    "option_model_field",
    "option_name",
]

try:
    __version__ = metadata.version("pyopts")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
