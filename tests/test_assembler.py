from datetime import date, datetime, timezone

import httpx
import pytest

from dailyreading.catalog import ESSAY_CATALOG
from dailyreading.models import EssayMetadata, PoemCandidate, Reading, ReadingKind
from dailyreading.services.assembler import FALLBACK_POEM, ReadingAssembler, essay_for
from dailyreading.services.cache import InMemoryReadingCache
from dailyreading.services.essays import WikisourceEssayFetcher
from dailyreading.services.poems import PoetryDBFetcher
from dailyreading.settings import Settings

SETTINGS = Settings()


def _poem(n: int) -> PoemCandidate:
    return PoemCandidate(title=f"Poem {n}", author="Poet", lines=("a", "b", "c", "d"), line_count=4)


class _StubPoems:
    def __init__(self, pool: list[PoemCandidate]) -> None:
        self._pool = pool
        self.calls = 0

    async def fetch_poems(self) -> list[PoemCandidate]:
        self.calls += 1
        return list(self._pool)


class _StubEssays:
    def __init__(self) -> None:
        self.requested: list[EssayMetadata] = []

    async def get_essay(self, metadata: EssayMetadata) -> Reading:
        self.requested.append(metadata)
        return Reading(
            kind=ReadingKind.ESSAY,
            title=metadata.title,
            author=metadata.author,
            content=(f"text of {metadata.document_id}",),
            citation_text=metadata.citation_text,
            citation_url=metadata.citation_url,
        )


def _assembler(pool: list[PoemCandidate]) -> tuple[ReadingAssembler, _StubPoems, _StubEssays]:
    poems, essays = _StubPoems(pool), _StubEssays()
    return ReadingAssembler(poems=poems, essays=essays, settings=SETTINGS), poems, essays


@pytest.mark.asyncio
async def test_mid_june_selects_of_truth() -> None:
    assembler, _, essays = _assembler([_poem(n) for n in range(7)])

    readings = await assembler.get_daily_readings(date(2024, 6, 15))

    assert readings.seed == 20240615
    assert essays.requested == [ESSAY_CATALOG[5]]
    assert readings.essay.title == "Of Truth"
    assert readings.essay.author == "Francis Bacon"
    assert readings.poem.title == "Poem 3"  # 20240615 % 7
    assert readings.poem.citation_text == "PoetryDB"


@pytest.mark.asyncio
async def test_same_calendar_day_gives_same_readings() -> None:
    assembler, _, _ = _assembler([_poem(n) for n in range(31)])

    morning = await assembler.get_daily_readings(datetime(2024, 6, 15, 0, 5, tzinfo=timezone.utc))
    night = await assembler.get_daily_readings(datetime(2024, 6, 15, 23, 55, tzinfo=timezone.utc))

    assert morning == night


@pytest.mark.asyncio
async def test_empty_pool_uses_fallback_poem() -> None:
    assembler, _, _ = _assembler([])

    readings = await assembler.get_daily_readings(date(2024, 6, 15))

    assert readings.poem == FALLBACK_POEM
    assert readings.poem.title == "Hope is the thing with feathers"
    assert readings.poem.author == "Emily Dickinson"
    assert len(readings.poem.content) == 4


@pytest.mark.asyncio
async def test_legacy_reading_returns_only_the_poem() -> None:
    assembler, poems, essays = _assembler([_poem(n) for n in range(7)])

    reading = await assembler.get_daily_reading(date(2024, 6, 15))

    assert reading.kind is ReadingKind.POEM
    assert reading.title == "Poem 3"
    assert poems.calls == 1
    assert essays.requested == []


@pytest.mark.asyncio
async def test_default_date_is_today_in_reference_zone() -> None:
    assembler, _, essays = _assembler([])
    before = datetime.now(SETTINGS.zone).date()

    readings = await assembler.get_daily_readings()

    assert before <= readings.day <= datetime.now(SETTINGS.zone).date()
    assert essays.requested == [essay_for(readings.day, SETTINGS)]


def test_empty_catalog_is_refused_at_construction() -> None:
    from dailyreading.catalog import CatalogError

    with pytest.raises(CatalogError):
        ReadingAssembler(poems=_StubPoems([]), essays=_StubEssays(), settings=SETTINGS, catalog=[])


@pytest.mark.asyncio
async def test_total_upstream_failure_still_returns_full_readings() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assembler = ReadingAssembler(
            poems=PoetryDBFetcher(client=client, settings=SETTINGS),
            essays=WikisourceEssayFetcher(client=client, settings=SETTINGS, cache=InMemoryReadingCache()),
            settings=SETTINGS,
        )
        readings = await assembler.get_daily_readings(date(2024, 6, 15))

    assert readings.poem == FALLBACK_POEM
    assert readings.essay.title == "Of Truth"
    assert len(readings.essay.content) == 1
    assert readings.essay.content[0]
