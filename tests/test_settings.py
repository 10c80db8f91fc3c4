# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for extractor settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyopts import OPTNAME_TAG, Extractor, ExtractorSettings


def test_defaults() -> None:
    settings = ExtractorSettings()

    assert settings.tag == OPTNAME_TAG
    assert settings.cache_bindings is True
    assert Extractor().settings == settings


def test_tag_is_stripped() -> None:
    assert ExtractorSettings(tag="  opt ").tag == "opt"


@pytest.mark.parametrize("tag", ["", "   "])
def test_blank_tag_rejected(tag: str) -> None:
    with pytest.raises(ValidationError, match="tag must not be empty"):
        ExtractorSettings(tag=tag)


def test_settings_are_frozen() -> None:
    settings = ExtractorSettings()

    with pytest.raises(ValidationError):
        settings.tag = "other"  # type: ignore[misc]
