"""Pydantic models for extraction input and output."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class Fidelity(str, Enum):
    """How much of the record to compute.

    ``basic`` skips the word count and the extended metadata fields;
    ``full`` computes everything.
    """

    BASIC = "basic"
    FULL = "full"


class SelectionSpan(BaseModel):
    """A user-highlighted excerpt that overrides content and summary."""

    model_config = {"frozen": True}

    text: str


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class ArticleMetadata(BaseModel):
    """Descriptor-level metadata.  ``None`` means the field was absent."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    author: str | None = None
    published_time: str | None = None
    site_name: str | None = None
    type: str | None = None
    image: str | None = None
    reading_time: str = "1 min read"

    # Full fidelity only
    word_count: int | None = None
    domain: str | None = None
    language: str | None = None
    canonical_url: str | None = None
    published_at: str | None = None  # ISO 8601


class ExtractionResult(BaseModel):
    """One extracted article.  Built fresh per call; the caller owns it."""

    title: str = ""
    url: str = ""
    content: str = ""
    summary: str = ""
    tags: list[str] = Field(default_factory=list)
    metadata: ArticleMetadata = Field(default_factory=ArticleMetadata)

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v or ""

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready create-article body.

        Metadata keys are camelCase (``publishedTime``, ``readingTime`` ...)
        and absent fields are omitted.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
