# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rich table rendering of a record's option bindings."""

from __future__ import annotations

from dataclasses import dataclass

from rich import box
from rich.console import Console
from rich.table import Table

from .fields import OPTNAME_TAG, FieldBinding, binding_map
from .kinds import annotation_label


@dataclass(frozen=True, slots=True)
class BindingRow:
    """One rendered line describing an option binding."""

    option_name: str
    attribute: str
    declared: str
    fits: str


def describe_bindings(record: object, *, tag: str = OPTNAME_TAG) -> list[BindingRow]:
    """Describe the option bindings of a record class or instance.

    Args:
        record: Dataclass or pydantic model class, or an instance of one.
        tag: Annotation key naming the accepted option.

    Returns:
        list[BindingRow]: Bindings in field declaration order.
    """

    record_type = record if isinstance(record, type) else type(record)
    return [_row(binding) for binding in binding_map(record_type, tag).values()]


def build_bindings_table(record: object, *, tag: str = OPTNAME_TAG) -> Table:
    """Return a rich table listing the option bindings of ``record``."""
    record_type = record if isinstance(record, type) else type(record)
    table = Table(title=f"{record_type.__qualname__} options", box=box.SIMPLE_HEAVY)
    table.add_column("Option", style="cyan", no_wrap=True)
    table.add_column("Field")
    table.add_column("Type")
    table.add_column("Fits", justify="center")
    for row in describe_bindings(record_type, tag=tag):
        table.add_row(row.option_name, row.attribute, row.declared, row.fits)
    return table


def render_bindings(record: object, *, console: Console | None = None, tag: str = OPTNAME_TAG) -> None:
    """Print the option bindings of ``record`` to ``console``."""
    target = console if console is not None else Console()
    target.print(build_bindings_table(record, tag=tag))


def _row(binding: FieldBinding) -> BindingRow:
    return BindingRow(
        option_name=binding.option_name,
        attribute=binding.attribute,
        declared=annotation_label(binding.annotation),
        fits="set/append" if binding.appendable else "set",
    )


__all__ = ["BindingRow", "build_bindings_table", "describe_bindings", "render_bindings"]
