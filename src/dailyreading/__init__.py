"""Deterministic poem-and-essay "reading of the day"."""

from __future__ import annotations

from datetime import date, datetime

import httpx

from dailyreading.models import DailyReadings, Reading
from dailyreading.services import (
    InMemoryReadingCache,
    PoetryDBFetcher,
    ReadingAssembler,
    WikisourceEssayFetcher,
)
from dailyreading.settings import Settings, get_settings

__version__ = "0.1.0"

_ESSAY_CACHE = InMemoryReadingCache()


def essay_cache() -> InMemoryReadingCache:
    """Process-wide essay cache shared by the module-level helpers."""
    return _ESSAY_CACHE


def build_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.request_timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


def build_assembler(client: httpx.AsyncClient, settings: Settings) -> ReadingAssembler:
    """Wire the PoetryDB and Wikisource fetchers around the shared essay cache."""
    return ReadingAssembler(
        poems=PoetryDBFetcher(client=client, settings=settings),
        essays=WikisourceEssayFetcher(client=client, settings=settings, cache=_ESSAY_CACHE),
        settings=settings,
    )


async def get_daily_readings(
    moment: date | datetime | None = None, *, settings: Settings | None = None
) -> DailyReadings:
    settings = settings or get_settings()
    async with build_client(settings) as client:
        return await build_assembler(client, settings).get_daily_readings(moment)


async def get_daily_reading(
    moment: date | datetime | None = None, *, settings: Settings | None = None
) -> Reading:
    settings = settings or get_settings()
    async with build_client(settings) as client:
        return await build_assembler(client, settings).get_daily_reading(moment)


__all__ = [
    "DailyReadings",
    "Reading",
    "Settings",
    "build_assembler",
    "build_client",
    "essay_cache",
    "get_daily_reading",
    "get_daily_readings",
    "__version__",
]
