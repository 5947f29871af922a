"""Application-wide constants."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from tldr.schemas.summaries import SummaryLength

# ---------------------------------------------------------------------------
# Summarization
# ---------------------------------------------------------------------------
SYSTEM_PROMPT = (
    "You are a highly skilled AI assistant that creates concise, accurate summaries of articles. "
    "Focus on the main points and key takeaways. Do not invent facts; if the article text is "
    "incomplete or unclear, say so. Respond in Markdown."
)
SUMMARY_TEMPERATURE = 0.5


@dataclass(frozen=True)
class LengthProfile:
    instruction: str
    max_tokens: int


LENGTH_PROFILES: MappingProxyType[SummaryLength, LengthProfile] = MappingProxyType(
    {
        SummaryLength.TWEET: LengthProfile(
            instruction="Summarize the article as a single tweet of at most 140 characters. No hashtags.",
            max_tokens=100,
        ),
        SummaryLength.TWO_SENTENCES: LengthProfile(
            instruction="Summarize the article in exactly two sentences.",
            max_tokens=150,
        ),
        SummaryLength.BULLETS: LengthProfile(
            instruction="Summarize the article as 3 to 7 short bullet points covering the key takeaways.",
            max_tokens=400,
        ),
        SummaryLength.BRIEF: LengthProfile(
            instruction="Summarize the article in two short paragraphs.",
            max_tokens=500,
        ),
        SummaryLength.DETAILED: LengthProfile(
            instruction=(
                "Write a detailed one-page summary of the article with short section headings, "
                "covering the argument, supporting evidence and conclusions."
            ),
            max_tokens=1500,
        ),
    }
)

# ---------------------------------------------------------------------------
# Response stream
# ---------------------------------------------------------------------------
METADATA_DELIMITER = "\n---\n"
STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"

# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------
WORDS_PER_MINUTE = 200
STRIPPED_TAGS = ("script", "style", "noscript", "iframe")
