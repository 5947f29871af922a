from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SummaryLength(str, Enum):
    TWEET = "tweet"
    TWO_SENTENCES = "two_sentences"
    BULLETS = "bullets"
    BRIEF = "brief"
    DETAILED = "detailed"


class SummarizeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Presence and format are checked by the application layer so that each
    # failure maps to its own plain-text reason.
    url: str | None = None
    length: SummaryLength = SummaryLength.BRIEF


class ArticleMetadata(BaseModel):
    """Page attributes streamed ahead of the summary, serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    title: str | None = None
    description: str | None = None
    image: str | None = None
    site_name: str | None = Field(default=None, alias="siteName")
    published_time: str | None = Field(default=None, alias="publishedTime")
    author: str | None = None
    estimated_read_time: str | None = Field(default=None, alias="estimatedReadTime")

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True, exclude_none=True)
