"""Service abstractions for the daily reading pipeline."""

from .assembler import FALLBACK_POEM, ReadingAssembler, essay_for, poem_reading
from .cache import InMemoryReadingCache, ReadingCache
from .essays import EssaySource, EssayText, WikisourceEssayFetcher, fallback_paragraph
from .poems import PoemBatch, PoemSource, PoetryDBFetcher
from .selector import calendar_day, daily_seed, select_indices

__all__ = [
    "FALLBACK_POEM",
    "ReadingAssembler",
    "essay_for",
    "poem_reading",
    "InMemoryReadingCache",
    "ReadingCache",
    "EssaySource",
    "EssayText",
    "WikisourceEssayFetcher",
    "fallback_paragraph",
    "PoemBatch",
    "PoemSource",
    "PoetryDBFetcher",
    "calendar_day",
    "daily_seed",
    "select_indices",
]
