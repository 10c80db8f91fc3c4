# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Populate destination records from typed option values.

Each option is matched to a field by the bare name of its class. The field
either takes the value outright when both share a kind, or has it appended
when the field is a sequence of that kind. Options are applied one at a time,
so a failure leaves the effects of every earlier option in place.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping

from pydantic import BaseModel

from .errors import FrozenDestinationError, NotAStructError, TypeMismatchError, UnknownOptionError
from .fields import FieldBinding, binding_map, cached_binding_map
from .kinds import Kind, appended, convert, element_fit, fits_exactly, value_kind_name
from .options import option_name
from .settings import ExtractorSettings

LOGGER = logging.getLogger(__name__)


class Extractor:
    """Apply option values to dataclass or pydantic model instances."""

    __slots__ = ("_settings",)

    def __init__(self, settings: ExtractorSettings | None = None) -> None:
        self._settings = settings if settings is not None else ExtractorSettings()

    @property
    def settings(self) -> ExtractorSettings:
        """Return the settings bound to this extractor."""
        return self._settings

    def extract(self, dest: object, *options: object) -> None:
        """Apply ``options`` to ``dest``, skipping options it declares no field for.

        Raises:
            NotAStructError: If ``dest`` is not a mutable record instance.
            DuplicateOptionNameError: If two fields of ``dest`` share an option name.
            TypeMismatchError: If a matched option cannot be fitted into its field.
        """

        self._apply(dest, options, must_find=False)

    def must_extract(self, dest: object, *options: object) -> None:
        """Apply ``options`` to ``dest``, failing on options it declares no field for.

        Raises:
            NotAStructError: If ``dest`` is not a mutable record instance.
            DuplicateOptionNameError: If two fields of ``dest`` share an option name.
            UnknownOptionError: If an option matches no field of ``dest``.
            TypeMismatchError: If a matched option cannot be fitted into its field.
        """

        self._apply(dest, options, must_find=True)

    def bindings_for(self, record_type: type) -> Mapping[str, FieldBinding]:
        """Return the option-name to field mapping used for ``record_type``."""
        if self._settings.cache_bindings:
            return cached_binding_map(record_type, self._settings.tag)
        return binding_map(record_type, self._settings.tag)

    def _apply(self, dest: object, options: Iterable[object], *, must_find: bool) -> None:
        bindings = self.bindings_for(_record_type(dest))
        for option in options:
            name = option_name(option)
            binding = bindings.get(name)
            if binding is None:
                if not must_find:
                    LOGGER.debug("skipping option %s with no matching field on %s", name, type(dest).__qualname__)
                    continue
                raise UnknownOptionError(name)
            _assign(dest, binding, option)


def _record_type(dest: object) -> type:
    """Return the class of ``dest`` once it is known to be a mutable record."""
    if isinstance(dest, BaseModel):
        if dest.model_config.get("frozen", False):
            raise FrozenDestinationError()
        return type(dest)
    if dataclasses.is_dataclass(dest) and not isinstance(dest, type):
        params = getattr(type(dest), "__dataclass_params__", None)
        if params is not None and params.frozen:
            raise FrozenDestinationError()
        return type(dest)
    raise NotAStructError()


def _assign(dest: object, binding: FieldBinding, option: object) -> None:
    for kind in binding.kinds:
        if fits_exactly(kind, option):
            setattr(dest, binding.attribute, _converted(binding, kind, option))
            return
    for kind in binding.kinds:
        element = element_fit(kind, option)
        if element is None:
            continue
        item = _converted(binding, element, option)
        setattr(dest, binding.attribute, appended(kind, getattr(dest, binding.attribute), item))
        return
    raise TypeMismatchError(binding.option_name, binding.kind_label, value_kind_name(option))


def _converted(binding: FieldBinding, kind: Kind, option: object) -> object:
    try:
        return convert(kind, option)
    except (TypeError, ValueError) as exc:
        raise TypeMismatchError(binding.option_name, kind.label, value_kind_name(option)) from exc


_DEFAULT_EXTRACTOR = Extractor()


def extract(dest: object, *options: object) -> None:
    """Apply ``options`` to ``dest``; options without a matching field are skipped."""
    _DEFAULT_EXTRACTOR.extract(dest, *options)


def must_extract(dest: object, *options: object) -> None:
    """Apply ``options`` to ``dest``; options without a matching field raise."""
    _DEFAULT_EXTRACTOR.must_extract(dest, *options)


__all__ = ["Extractor", "extract", "must_extract"]
