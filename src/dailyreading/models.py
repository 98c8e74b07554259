"""Core data models used throughout the daily reading service."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ReadingKind(str, Enum):
    POEM = "poem"
    ESSAY = "essay"


class EssayMetadata(BaseModel):
    """Catalog entry describing an essay whose text lives on the text service."""

    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    document_id: str
    citation_text: str
    citation_url: str | None = None


class PoemCandidate(BaseModel):
    """A poem returned by the poetry service, eligible for selection."""

    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    lines: tuple[str, ...]
    line_count: int

    @classmethod
    def from_payload(cls, payload: Any) -> "PoemCandidate | None":
        """Build a candidate from a PoetryDB entry, or ``None`` if it is malformed."""
        if not isinstance(payload, dict):
            return None
        lines = payload.get("lines")
        if not isinstance(lines, list):
            return None
        try:
            line_count = int(str(payload.get("linecount", "")).strip())
        except ValueError:
            return None
        return cls(
            title=str(payload.get("title") or "Untitled").strip(),
            author=str(payload.get("author") or "Unknown").strip(),
            lines=tuple(str(line) for line in lines),
            line_count=line_count,
        )


class Reading(BaseModel):
    """Normalized poem or essay handed to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    kind: ReadingKind
    title: str
    author: str
    content: tuple[str, ...]
    citation_text: str | None = None
    citation_url: str | None = None

    @field_validator("content")
    @classmethod
    def _non_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("reading content must contain at least one entry")
        return value


class DailyReadings(BaseModel):
    """The poem and essay selected for one calendar day."""

    model_config = ConfigDict(frozen=True)

    day: date
    seed: int
    poem: Reading
    essay: Reading
