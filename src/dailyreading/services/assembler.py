"""Assembles the day's poem and essay into normalized readings."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from datetime import date, datetime

import structlog

from dailyreading.catalog import ESSAY_CATALOG, validate_catalog
from dailyreading.models import DailyReadings, EssayMetadata, PoemCandidate, Reading, ReadingKind
from dailyreading.settings import Settings
from .essays import EssaySource
from .poems import PoemSource
from .selector import calendar_day, daily_seed, select_indices

logger = structlog.get_logger(__name__)

POEM_CITATION = "PoetryDB"
POEM_CITATION_URL = "https://poetrydb.org"

FALLBACK_POEM = Reading(
    kind=ReadingKind.POEM,
    title="Hope is the thing with feathers",
    author="Emily Dickinson",
    content=(
        "Hope is the thing with feathers",
        "That perches in the soul,",
        "And sings the tune without the words,",
        "And never stops at all,",
    ),
    citation_text=POEM_CITATION,
    citation_url=POEM_CITATION_URL,
)


def essay_for(
    moment: date | datetime,
    settings: Settings,
    catalog: Sequence[EssayMetadata] = ESSAY_CATALOG,
) -> EssayMetadata:
    """Return the catalog entry selected for the day of ``moment`` without any I/O."""
    seed = daily_seed(moment, settings.zone)
    _, essay_index = select_indices(seed, 0, len(catalog), multiplier=settings.essay_multiplier)
    return catalog[essay_index]


def poem_reading(poem: PoemCandidate) -> Reading:
    if not poem.lines:
        return FALLBACK_POEM
    return Reading(
        kind=ReadingKind.POEM,
        title=poem.title,
        author=poem.author,
        content=poem.lines,
        citation_text=POEM_CITATION,
        citation_url=POEM_CITATION_URL,
    )


class ReadingAssembler:
    """Coordinates seed computation, both fetchers, and fallback substitution."""

    def __init__(
        self,
        poems: PoemSource,
        essays: EssaySource,
        settings: Settings,
        catalog: Sequence[EssayMetadata] = ESSAY_CATALOG,
    ) -> None:
        self._poems = poems
        self._essays = essays
        self._settings = settings
        self._catalog = list(validate_catalog(catalog))

    def _resolve_moment(self, moment: date | datetime | None) -> date | datetime:
        return moment if moment is not None else datetime.now(self._settings.zone)

    def essay_for(self, moment: date | datetime | None = None) -> EssayMetadata:
        return essay_for(self._resolve_moment(moment), self._settings, self._catalog)

    async def get_daily_readings(self, moment: date | datetime | None = None) -> DailyReadings:
        moment = self._resolve_moment(moment)
        day = calendar_day(moment, self._settings.zone)
        seed = daily_seed(moment, self._settings.zone)
        metadata = self.essay_for(day)

        pool, essay = await asyncio.gather(
            self._poems.fetch_poems(),
            self._essays.get_essay(metadata),
        )
        poem_index, essay_index = select_indices(
            seed, len(pool), len(self._catalog), multiplier=self._settings.essay_multiplier
        )
        poem = self._pick_poem(pool, poem_index, seed)
        logger.info(
            "readings.assembled",
            day=day.isoformat(),
            seed=seed,
            pool_size=len(pool),
            poem_index=poem_index,
            essay_index=essay_index,
            essay=metadata.document_id,
        )
        return DailyReadings(day=day, seed=seed, poem=poem, essay=essay)

    async def get_daily_reading(self, moment: date | datetime | None = None) -> Reading:
        """Poem-only variant kept for callers that predate the essay pairing."""
        moment = self._resolve_moment(moment)
        seed = daily_seed(moment, self._settings.zone)
        pool = await self._poems.fetch_poems()
        poem_index, _ = select_indices(
            seed, len(pool), len(self._catalog), multiplier=self._settings.essay_multiplier
        )
        return self._pick_poem(pool, poem_index, seed)

    def _pick_poem(self, pool: Sequence[PoemCandidate], index: int, seed: int) -> Reading:
        if not pool:
            logger.warning("readings.poem_fallback", seed=seed)
            return FALLBACK_POEM
        return poem_reading(pool[index])
