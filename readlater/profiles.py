"""Extractor configuration and YAML-based per-site profiles.

Profile file layout::

    default:
      words_per_minute: 230
    domains:
      example.com:
        extra_content_patterns: [".story-body"]
      blog.example.com:
        extra_noise_patterns: [".newsletter", "#related"]
        fidelity: basic

The longest ``domains`` key that equals or is a parent domain of the page
host is merged over ``default``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, Field, field_validator

from readlater.extractors.patterns import (
    CONTENT_PATTERNS,
    NOISE_PATTERNS,
    NodePattern,
    parse_patterns,
)
from readlater.items import Fidelity
from readlater.settings import (
    ELLIPSIS,
    MIN_READING_MINUTES,
    SUMMARY_LENGTH,
    WORDS_PER_MINUTE,
)


class ExtractorConfig(BaseModel):
    """Tunable extraction parameters.  The defaults mirror :mod:`readlater.settings`."""

    model_config = {"extra": "forbid", "frozen": True}

    words_per_minute: int = Field(default=WORDS_PER_MINUTE, gt=0)
    min_reading_minutes: int = Field(default=MIN_READING_MINUTES, ge=0)
    summary_length: int = Field(default=SUMMARY_LENGTH, gt=0)
    ellipsis: str = ELLIPSIS
    fidelity: Fidelity = Fidelity.FULL

    # Selector-like strings, see readlater.extractors.patterns
    extra_content_patterns: tuple[str, ...] = ()
    extra_noise_patterns: tuple[str, ...] = ()

    @field_validator("extra_content_patterns", "extra_noise_patterns", mode="before")
    @classmethod
    def coerce_patterns(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return v

    @field_validator("extra_content_patterns", "extra_noise_patterns")
    @classmethod
    def validate_patterns(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        parse_patterns(v)  # raises ValueError on bad syntax
        return v

    def content_patterns(self) -> tuple[NodePattern, ...]:
        """Extra patterns first, then the built-in priority list."""
        return parse_patterns(self.extra_content_patterns) + CONTENT_PATTERNS

    def noise_patterns(self) -> tuple[NodePattern, ...]:
        return NOISE_PATTERNS + parse_patterns(self.extra_noise_patterns)


def load_profile(path: str | Path, url: str = "") -> ExtractorConfig:
    """Load a YAML profile and return the merged config for *url*.

    Raises:
        ValueError: When the file is not a mapping.
        pydantic.ValidationError: When a merged value is invalid.
        OSError: When the file cannot be read.
    """
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile {path} must be a mapping, got {type(data).__name__}")
    default = data.get("default") or {}
    domains = data.get("domains") or {}

    netloc = (urlparse(url).hostname or "") if url else ""
    best_key = ""
    best_cfg: dict[str, Any] = {}
    if isinstance(domains, dict):
        for key, cfg in domains.items():
            if not isinstance(key, str) or not isinstance(cfg, dict):
                continue
            key_lower = key.lower()
            if (netloc == key_lower or netloc.endswith("." + key_lower)) and (
                len(key_lower) > len(best_key)
            ):
                best_key = key_lower
                best_cfg = cfg

    merged: dict[str, Any] = {}
    if isinstance(default, dict):
        merged.update(default)
    merged.update(best_cfg)
    return ExtractorConfig.model_validate(merged)
