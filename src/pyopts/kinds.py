# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Classify option values and field annotations into comparable kinds.

A kind is the storage shape of a value: the first builtin found in its class
MRO (``bool``, ``int``, ``str``, ``list`` ...) or, for classes built on none of
those, the class itself. Field annotations are classified the same way so that
an option fits a field when both share a kind, or when the field is a sequence
whose element kind matches the option.
"""

from __future__ import annotations

import collections.abc
import types
from dataclasses import dataclass
from typing import Annotated, Any, Final, TypeVar, Union, get_args, get_origin

from .options import unwrap

_BUILTIN_KINDS: Final[frozenset[type]] = frozenset(
    {bool, int, float, complex, str, bytes, bytearray, list, tuple, dict, set, frozenset}
)

# Annotations that describe an appendable sequence; each maps to the concrete
# container used when the field value is rebuilt.
_SEQUENCE_CONTAINERS: Final[dict[Any, type]] = {
    list: list,
    tuple: tuple,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
}

# Abstract collection origins mapped to the builtin they are built from.
_ABSTRACT_ORIGINS: Final[dict[Any, type]] = {
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
}

_NONE_TYPE: Final[type] = type(None)


@dataclass(frozen=True, slots=True)
class Kind:
    """Classified view of a field annotation.

    Attributes:
        label: Display name used in error messages.
        key: Builtin or user class compared against option kinds. ``None``
            when the kind is either unconstrained or not understood.
        target: Callable used to convert a fitted value into the declared type.
        element: Alternatives accepted by sequence appends, or ``None`` when
            the kind is not an appendable sequence.
        accepts_any: ``True`` for ``Any``/``object``/untyped annotations.
    """

    label: str
    key: type | None = None
    target: Any = None
    element: tuple[Kind, ...] | None = None
    accepts_any: bool = False

    @property
    def is_sequence(self) -> bool:
        """Return ``True`` when options may be appended to this kind."""
        return self.element is not None


ANY_KIND: Final[Kind] = Kind(label="any", accepts_any=True)


def kind_key(klass: type) -> type:
    """Return the kind key of ``klass``: its first builtin base, or itself."""
    for base in klass.__mro__:
        if base in _BUILTIN_KINDS:
            return base
    return klass


def value_kind(value: object) -> type:
    """Return the kind key of an option value, looking through :class:`Option`."""
    return kind_key(type(unwrap(value)))


def value_kind_name(value: object) -> str:
    """Return the display name of an option value's kind."""
    return value_kind(value).__name__


def classify(annotation: Any) -> tuple[Kind, ...]:
    """Return the kinds a field annotated with ``annotation`` accepts.

    Unions yield one alternative per member (``None`` members are dropped), so
    ``int | None`` classifies exactly like ``int``.
    """

    if annotation is Any or annotation is object or isinstance(annotation, TypeVar):
        return (ANY_KIND,)
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return classify(supertype)
    origin = get_origin(annotation)
    if origin is Annotated:
        return classify(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        alternatives: list[Kind] = []
        for member in get_args(annotation):
            if member is _NONE_TYPE:
                continue
            alternatives.extend(classify(member))
        return tuple(alternatives)
    if origin is not None:
        return (_classify_generic(annotation, origin, get_args(annotation)),)
    if isinstance(annotation, type):
        if annotation in _SEQUENCE_CONTAINERS:
            return (_sequence_kind(_SEQUENCE_CONTAINERS[annotation], (ANY_KIND,)),)
        declared = _ABSTRACT_ORIGINS.get(annotation, annotation)
        key = kind_key(declared)
        if key in (list, tuple):
            return (_sequence_kind(declared, (ANY_KIND,)),)
        return (Kind(label=key.__name__, key=key, target=declared),)
    return (Kind(label=annotation_label(annotation)),)


def _classify_generic(annotation: Any, origin: Any, args: tuple[Any, ...]) -> Kind:
    container = _SEQUENCE_CONTAINERS.get(origin)
    if container is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return _sequence_kind(tuple, classify(args[0]))
        # Fixed-length tuples can be replaced but not appended to.
        return Kind(label="tuple", key=tuple, target=tuple)
    if container is not None:
        element = classify(args[0]) if args else (ANY_KIND,)
        return _sequence_kind(container, element)
    declared = _ABSTRACT_ORIGINS.get(origin, origin)
    if isinstance(declared, type):
        key = kind_key(declared)
        return Kind(label=key.__name__, key=key, target=declared)
    return Kind(label=annotation_label(annotation))


def _sequence_kind(container: type, element: tuple[Kind, ...]) -> Kind:
    key = kind_key(container)
    return Kind(label=key.__name__, key=key, target=container, element=element)


def annotation_label(annotation: Any) -> str:
    """Return a readable name for an annotation, unquoted when it was left as a string."""
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, type):
        return annotation.__name__
    return repr(annotation).replace("typing.", "")


def same_kind(field_key: type, offered: type) -> bool:
    """Return ``True`` when an offered kind matches a field kind key.

    Builtin kinds compare by identity so ``bool`` never passes for ``int``;
    user classes accept subclasses.
    """

    if field_key in _BUILTIN_KINDS or offered in _BUILTIN_KINDS:
        return field_key is offered
    return issubclass(offered, field_key)


def fits_exactly(kind: Kind, value: object) -> bool:
    """Return ``True`` when ``value`` can overwrite a field of ``kind``."""
    if kind.accepts_any:
        return True
    if kind.key is None:
        return False
    return same_kind(kind.key, value_kind(value))


def element_fit(kind: Kind, value: object) -> Kind | None:
    """Return the element kind ``value`` may be appended as, if any."""
    if kind.element is None:
        return None
    for element in kind.element:
        if fits_exactly(element, value):
            return element
    return None


def convert(kind: Kind, value: object) -> Any:
    """Convert ``value`` to the declared type of ``kind``.

    Builtin-backed kinds are rebuilt through their declared type, which strips
    the option's own class (``WithUsername("bob")`` becomes ``"bob"``) and
    routes enum fields through the enum constructor. Raises ``TypeError`` or
    ``ValueError`` when the declared type rejects the value.
    """

    payload = unwrap(value)
    target = kind.target
    if kind.accepts_any or target is None or type(payload) is target:
        return payload
    if kind.key in _BUILTIN_KINDS:
        return target(payload)
    return payload


def appended(kind: Kind, current: Any, item: object) -> Any:
    """Return a new sequence holding ``current`` followed by ``item``.

    A ``None`` current value counts as an empty sequence.
    """

    existing = [] if current is None else list(current)
    return kind.target([*existing, item])


__all__ = [
    "ANY_KIND",
    "Kind",
    "annotation_label",
    "appended",
    "classify",
    "convert",
    "element_fit",
    "fits_exactly",
    "kind_key",
    "same_kind",
    "value_kind",
    "value_kind_name",
]
