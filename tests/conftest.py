# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from pyopts import clear_binding_cache
from tests.helpers.records import SampleOptions


@pytest.fixture(autouse=True)
def _fresh_binding_cache() -> None:
    """Start every test with an empty per-type binding cache."""
    clear_binding_cache()


@pytest.fixture
def sample() -> SampleOptions:
    """Return an empty destination record."""
    return SampleOptions()
