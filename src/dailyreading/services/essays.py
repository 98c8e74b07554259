"""Essay text retrieval from a MediaWiki text-extract endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import structlog

from dailyreading.models import EssayMetadata, Reading, ReadingKind
from dailyreading.settings import Settings
from dailyreading.text import TextPolicy, shape_paragraphs
from .cache import InMemoryReadingCache, ReadingCache

logger = structlog.get_logger(__name__)

MISSING_PAGE_ID = "-1"


@dataclass(slots=True)
class EssayText:
    """Outcome of one document lookup; ``reason`` is set when it degraded."""

    document_id: str
    text: str = ""
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


class EssaySource(Protocol):
    """Protocol for components that resolve a catalog entry into a Reading."""

    async def get_essay(self, metadata: EssayMetadata) -> Reading:
        ...


def fallback_paragraph(metadata: EssayMetadata) -> str:
    where = metadata.citation_url or metadata.citation_text
    return (
        f"The text of “{metadata.title}” by {metadata.author} could not be "
        f"loaded today. It can be read in full at {where}."
    )


class WikisourceEssayFetcher:
    """Resolves essays through the text-extract API, caching by document id."""

    name = "wikisource"

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        cache: ReadingCache | None = None,
        policy: TextPolicy | None = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._cache = cache if cache is not None else InMemoryReadingCache()
        self._policy = policy or TextPolicy.from_settings(settings)

    @property
    def cache(self) -> ReadingCache:
        return self._cache

    async def get_essay(self, metadata: EssayMetadata) -> Reading:
        async def build() -> Reading:
            return await self._build_reading(metadata)

        return await self._cache.get_or_create(metadata.document_id, build)

    async def _build_reading(self, metadata: EssayMetadata) -> Reading:
        fetched = await self.fetch_text(metadata.document_id)
        paragraphs = shape_paragraphs(fetched.text, self._policy) if fetched.ok else []
        if not paragraphs:
            logger.warning(
                "essays.fallback",
                document_id=metadata.document_id,
                reason=fetched.reason or "no_paragraphs",
            )
            paragraphs = [fallback_paragraph(metadata)]
        else:
            logger.info("essays.shaped", document_id=metadata.document_id, paragraphs=len(paragraphs))
        return Reading(
            kind=ReadingKind.ESSAY,
            title=metadata.title,
            author=metadata.author,
            content=tuple(paragraphs),
            citation_text=metadata.citation_text,
            citation_url=metadata.citation_url,
        )

    async def fetch_text(self, document_id: str) -> EssayText:
        params = {
            "action": "query",
            "prop": "extracts",
            "explaintext": "1",
            "exsectionformat": "wiki",
            "redirects": "1",
            "format": "json",
            "titles": document_id,
        }
        try:
            response = await self._client.get(
                self._settings.text_service_url,
                params=params,
                timeout=self._settings.request_timeout,
            )
        except httpx.HTTPError as exc:
            logger.warning("essays.fetch_failed", document_id=document_id, error=str(exc))
            return EssayText(document_id=document_id, reason="http_error")
        if not response.is_success:
            logger.warning("essays.bad_status", document_id=document_id, status=response.status_code)
            return EssayText(document_id=document_id, reason="http_status")
        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("essays.invalid_json", document_id=document_id, error=str(exc))
            return EssayText(document_id=document_id, reason="invalid_json")
        return _extract_text(document_id, payload)


def _extract_text(document_id: str, payload: Any) -> EssayText:
    query = payload.get("query") if isinstance(payload, dict) else None
    pages = query.get("pages") if isinstance(query, dict) else None
    if not isinstance(pages, dict) or not pages:
        logger.warning("essays.unexpected_payload", document_id=document_id)
        return EssayText(document_id=document_id, reason="unexpected_payload")
    page_id, page = next(iter(pages.items()))
    if page_id == MISSING_PAGE_ID or not isinstance(page, dict) or "missing" in page:
        logger.warning("essays.not_found", document_id=document_id)
        return EssayText(document_id=document_id, reason="not_found")
    extract = page.get("extract")
    if not isinstance(extract, str) or not extract.strip():
        logger.warning("essays.empty_extract", document_id=document_id, page_id=page_id)
        return EssayText(document_id=document_id, reason="empty_extract")
    return EssayText(document_id=document_id, text=extract)
