# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Discover option-name annotations on destination record fields.

A field opts in to extraction by declaring the option name it accepts, either
through field metadata::

    @dataclass
    class Settings:
        username: str = option_field("WithUsername", default="")

or through an ``Annotated`` marker, which works for dataclasses and pydantic
models alike::

    class Settings(BaseModel):
        username: Annotated[str, OptName("WithUsername")] = ""
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import typing
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Annotated, Any, Final, get_args, get_origin

from pydantic import BaseModel, Field
from pydantic.fields import FieldInfo

from .errors import DuplicateOptionNameError, NotAStructError
from .kinds import Kind, classify

LOGGER = logging.getLogger(__name__)

OPTNAME_TAG: Final[str] = "optname"
BINDING_CACHE_SIZE: Final[int] = 256


@dataclass(frozen=True, slots=True)
class OptName:
    """``Annotated`` marker naming the option a field accepts."""

    name: str


@dataclass(frozen=True, slots=True)
class FieldBinding:
    """Link between a declared option name and the record attribute it fills."""

    attribute: str
    option_name: str
    annotation: Any
    kinds: tuple[Kind, ...]

    @property
    def kind_label(self) -> str:
        """Return the display name of the field's kind."""
        return " | ".join(kind.label for kind in self.kinds) or "none"

    @property
    def appendable(self) -> bool:
        """Return ``True`` when options may be appended to the field."""
        return any(kind.is_sequence for kind in self.kinds)


def option_field(name: str, *, tag: str = OPTNAME_TAG, **kwargs: Any) -> Any:
    """Return a dataclass field that accepts the option called ``name``.

    Args:
        name: Option name, i.e. the class name of the accepted option values.
        tag: Metadata key under which the name is stored.
        **kwargs: Forwarded to :func:`dataclasses.field`.

    Returns:
        Any: Field specifier suitable as a dataclass attribute default.
    """

    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[tag] = name
    return dataclasses.field(metadata=metadata, **kwargs)


def option_model_field(name: str, *, tag: str = OPTNAME_TAG, **kwargs: Any) -> Any:
    """Return a pydantic ``Field`` that accepts the option called ``name``.

    Args:
        name: Option name, i.e. the class name of the accepted option values.
        tag: ``json_schema_extra`` key under which the name is stored.
        **kwargs: Forwarded to :func:`pydantic.Field`.

    Returns:
        Any: Field specifier suitable as a pydantic model attribute default.
    """

    extra = kwargs.pop("json_schema_extra", None)
    if extra is not None and not isinstance(extra, Mapping):
        raise TypeError("json_schema_extra must be a mapping when combined with an option name")
    merged = dict(extra or {})
    merged[tag] = name
    return Field(json_schema_extra=merged, **kwargs)


def is_record_type(record_type: object) -> bool:
    """Return ``True`` for dataclass and pydantic model classes."""
    if not isinstance(record_type, type):
        return False
    return dataclasses.is_dataclass(record_type) or issubclass(record_type, BaseModel)


def collect_bindings(record_type: type, tag: str = OPTNAME_TAG) -> tuple[FieldBinding, ...]:
    """Return the bindings of every tagged field of ``record_type``.

    Bindings are listed in field declaration order. Fields without an option
    name, or with an empty one, are skipped.

    Raises:
        NotAStructError: If ``record_type`` is not a dataclass or pydantic model.
    """

    if not is_record_type(record_type):
        raise NotAStructError()
    if issubclass(record_type, BaseModel):
        entries = _model_entries(record_type, tag)
    else:
        entries = _dataclass_entries(record_type, tag)
    return tuple(
        FieldBinding(attribute=attribute, option_name=name, annotation=annotation, kinds=classify(annotation))
        for attribute, name, annotation in entries
        if name
    )


def binding_map(record_type: type, tag: str = OPTNAME_TAG) -> dict[str, FieldBinding]:
    """Return the option-name to field mapping of ``record_type``.

    Raises:
        NotAStructError: If ``record_type`` is not a dataclass or pydantic model.
        DuplicateOptionNameError: If two fields declare the same option name.
    """

    mapping: dict[str, FieldBinding] = {}
    for binding in collect_bindings(record_type, tag):
        if binding.option_name in mapping:
            raise DuplicateOptionNameError(binding.option_name)
        mapping[binding.option_name] = binding
    return mapping


@lru_cache(maxsize=BINDING_CACHE_SIZE)
def cached_binding_map(record_type: type, tag: str = OPTNAME_TAG) -> Mapping[str, FieldBinding]:
    """Return a memoised, read-only :func:`binding_map` for ``record_type``.

    At most ``BINDING_CACHE_SIZE`` record types are kept; the least recently
    used is evicted first. Failures are not memoised, so a record with
    duplicate option names raises on every call.
    """

    mapping = MappingProxyType(binding_map(record_type, tag))
    LOGGER.debug("cached %d option binding(s) for %s", len(mapping), record_type.__qualname__)
    return mapping


def clear_binding_cache() -> None:
    """Forget every memoised binding map."""
    cached_binding_map.cache_clear()


def _dataclass_entries(record_type: type, tag: str) -> Iterator[tuple[str, str, Any]]:
    try:
        hints: dict[str, Any] | None = typing.get_type_hints(record_type, include_extras=True)
    except (NameError, TypeError) as exc:
        LOGGER.debug("resolving annotations of %s field by field: %s", record_type.__qualname__, exc)
        hints = None
    for field in dataclasses.fields(record_type):
        if hints is not None:
            annotation = hints.get(field.name, field.type)
        else:
            annotation = _field_annotation(record_type, field)
        name = _metadata_name(field.metadata, tag)
        if name is None:
            name = _marker_name(get_args(annotation)[1:] if get_origin(annotation) is Annotated else ())
        yield field.name, name or "", annotation


def _field_annotation(record_type: type, field: dataclasses.Field[Any]) -> Any:
    """Resolve one field's annotation in the namespace of the class declaring it.

    An annotation that still cannot be resolved is returned as written, so only
    that field loses its kind.
    """

    if not isinstance(field.type, str):
        return field.type
    owner = next(
        (base for base in record_type.__mro__ if field.name in inspect.get_annotations(base)),
        record_type,
    )
    holder = type(
        owner.__name__,
        (),
        {"__module__": owner.__module__, "__annotations__": {field.name: field.type}},
    )
    try:
        hints = typing.get_type_hints(holder, localns=dict(vars(owner)), include_extras=True)
    except (NameError, TypeError) as exc:
        LOGGER.debug("unable to resolve %s.%s: %s", record_type.__qualname__, field.name, exc)
        return field.type
    return hints[field.name]


def _model_entries(record_type: type[BaseModel], tag: str) -> Iterator[tuple[str, str, Any]]:
    for attribute, info in record_type.model_fields.items():
        name = _extra_name(info, tag)
        if name is None:
            name = _marker_name(info.metadata)
        yield attribute, name or "", info.annotation


def _metadata_name(metadata: Mapping[str, Any], tag: str) -> str | None:
    value = metadata.get(tag)
    return value.strip() if isinstance(value, str) else None


def _extra_name(info: FieldInfo, tag: str) -> str | None:
    extra = info.json_schema_extra
    if not isinstance(extra, Mapping):
        return None
    return _metadata_name(extra, tag)


def _marker_name(metadata: Iterable[Any]) -> str | None:
    for item in metadata:
        if isinstance(item, OptName):
            return item.name.strip()
    return None


__all__ = [
    "BINDING_CACHE_SIZE",
    "OPTNAME_TAG",
    "FieldBinding",
    "OptName",
    "binding_map",
    "cached_binding_map",
    "clear_binding_cache",
    "collect_bindings",
    "is_record_type",
    "option_field",
    "option_model_field",
]
