"""Helpers that turn raw extracted document text into display paragraphs."""

from __future__ import annotations

import re
from dataclasses import dataclass

from dailyreading.settings import Settings

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
WHITESPACE = re.compile(r"\s+")
SECTION_MARKER = "="


@dataclass(slots=True, frozen=True)
class TextPolicy:
    """Length limits applied to an essay excerpt."""

    word_budget: int = 2500
    min_paragraphs: int = 6
    max_paragraphs: int = 20

    @classmethod
    def from_settings(cls, settings: Settings) -> "TextPolicy":
        return cls(
            word_budget=settings.word_budget,
            min_paragraphs=settings.min_paragraphs,
            max_paragraphs=settings.max_paragraphs,
        )


def split_paragraphs(raw: str) -> list[str]:
    """Split text on blank lines, dropping empty blocks and section headings."""
    if not raw:
        return []
    paragraphs: list[str] = []
    for block in PARAGRAPH_BREAK.split(raw):
        paragraph = block.strip()
        if not paragraph or paragraph.startswith(SECTION_MARKER):
            continue
        paragraphs.append(WHITESPACE.sub(" ", paragraph))
    return paragraphs


def word_count(text: str) -> int:
    return len(text.split())


def shape_paragraphs(raw: str, policy: TextPolicy | None = None) -> list[str]:
    """Return an in-order excerpt of ``raw`` bounded by ``policy``.

    Paragraphs are kept until either the running word count has passed the
    budget with at least ``min_paragraphs`` kept, or ``max_paragraphs`` is
    reached.
    """
    policy = policy or TextPolicy()
    kept: list[str] = []
    words = 0
    for paragraph in split_paragraphs(raw):
        if len(kept) >= policy.max_paragraphs:
            break
        if words > policy.word_budget and len(kept) >= policy.min_paragraphs:
            break
        kept.append(paragraph)
        words += word_count(paragraph)
    return kept
