"""Poem pool retrieval from the PoetryDB service."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol
from urllib.parse import quote

import httpx
import structlog

from dailyreading.catalog import POET_ROSTER
from dailyreading.models import PoemCandidate
from dailyreading.settings import Settings

logger = structlog.get_logger(__name__)

POEM_FIELDS = "title,author,lines,linecount"


@dataclass(slots=True)
class PoemBatch:
    """Outcome of one poet lookup; ``reason`` is set when it degraded."""

    poet: str
    poems: list[PoemCandidate] = field(default_factory=list)
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


class PoemSource(Protocol):
    """Protocol for components that build the daily poem pool."""

    async def fetch_poems(self) -> list[PoemCandidate]:
        ...


class PoetryDBFetcher:
    """Fetches candidate poems for the leading poets of the roster."""

    name = "poetrydb"

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        roster: Sequence[str] = POET_ROSTER,
    ) -> None:
        self._client = client
        self._settings = settings
        self._roster = list(roster)
        self._semaphore = asyncio.Semaphore(settings.max_concurrency)

    @property
    def poets(self) -> list[str]:
        return self._roster[: self._settings.poet_fan_out]

    async def fetch_poems(self) -> list[PoemCandidate]:
        batches = await self.fetch_batches()
        pool = [poem for batch in batches for poem in batch.poems]
        failed = [batch.poet for batch in batches if not batch.ok]
        if not pool:
            logger.warning("poems.pool_empty", poets=len(batches), failed=len(failed))
        else:
            logger.info("poems.pool_ready", size=len(pool), failed_poets=failed)
        return pool

    async def fetch_batches(self) -> list[PoemBatch]:
        # gather preserves argument order, so the pool stays in roster order.
        return list(await asyncio.gather(*(self._fetch_poet(poet) for poet in self.poets)))

    async def _fetch_poet(self, poet: str) -> PoemBatch:
        url = f"{self._settings.poetry_base_url.rstrip('/')}/author/{quote(poet)}/{POEM_FIELDS}"
        async with self._semaphore:
            try:
                response = await self._client.get(url, timeout=self._settings.request_timeout)
            except httpx.HTTPError as exc:
                logger.warning("poems.fetch_failed", poet=poet, error=str(exc))
                return PoemBatch(poet=poet, reason="http_error")
        if not response.is_success:
            logger.warning("poems.bad_status", poet=poet, status=response.status_code)
            return PoemBatch(poet=poet, reason="http_status")
        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("poems.invalid_json", poet=poet, error=str(exc))
            return PoemBatch(poet=poet, reason="invalid_json")
        if not isinstance(payload, list):
            # PoetryDB reports unknown authors as {"status": 404, "reason": ...}.
            logger.warning("poems.unexpected_payload", poet=poet, payload_type=type(payload).__name__)
            return PoemBatch(poet=poet, reason="unexpected_payload")
        poems = self._select(payload)
        logger.debug("poems.fetched", poet=poet, received=len(payload), kept=len(poems))
        return PoemBatch(poet=poet, poems=poems)

    def _select(self, payload: list) -> list[PoemCandidate]:
        kept: list[PoemCandidate] = []
        for entry in payload:
            candidate = PoemCandidate.from_payload(entry)
            if candidate is None:
                continue
            if not self._settings.min_lines <= candidate.line_count <= self._settings.max_lines:
                continue
            kept.append(candidate)
            if len(kept) >= self._settings.per_poet_cap:
                break
        return kept
