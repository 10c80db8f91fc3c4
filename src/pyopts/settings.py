# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for the option extractor."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from .fields import OPTNAME_TAG


class ExtractorSettings(BaseModel):
    """Knobs controlling how destination fields are discovered."""

    model_config = ConfigDict(frozen=True)

    tag: str = OPTNAME_TAG
    cache_bindings: bool = True

    @field_validator("tag")
    @classmethod
    def _normalise_tag(cls, value: str) -> str:
        """Strip whitespace and reject an empty annotation key."""
        stripped = value.strip()
        if not stripped:
            raise ValueError("tag must not be empty")
        return stripped


__all__ = ["ExtractorSettings"]
