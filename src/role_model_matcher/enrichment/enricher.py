import logging
from typing import Protocol

from role_model_matcher.api.schemas import EnrichedMatch
from role_model_matcher.errors import EnrichmentFailure
from role_model_matcher.matching.generator import Candidate
from role_model_matcher.providers.encyclopedia.wikipedia import WikiSummary

logger = logging.getLogger(__name__)


class SummaryLookup(Protocol):
    async def lookup_summary(self, title: str) -> WikiSummary: ...


class SummaryEnricher:
    """Attaches Wikipedia summaries to candidates, one lookup at a time.

    A candidate without a name or page title is skipped, and a failed lookup
    drops only that candidate. Survivors keep their generated order.
    """

    def __init__(self, lookup: SummaryLookup) -> None:
        self.lookup = lookup

    async def enrich(self, candidates: list[Candidate]) -> list[EnrichedMatch]:
        enriched: list[EnrichedMatch] = []
        for candidate in candidates:
            if not candidate.is_complete:
                logger.info("enrich.skipped name=%s wiki_title=%s", candidate.name, candidate.wiki_title)
                continue
            try:
                summary = await self.lookup.lookup_summary(candidate.wiki_title)
            except EnrichmentFailure as exc:
                logger.warning("enrich.failed wiki_title=%r reason=%s", candidate.wiki_title, exc.reason)
                continue
            enriched.append(
                EnrichedMatch(
                    name=candidate.name,
                    wiki_title=candidate.wiki_title,
                    reason=candidate.short_reason,
                    wiki_summary=summary.extract,
                    wiki_url=summary.url,
                )
            )
        logger.info("enrich.done candidates=%d enriched=%d", len(candidates), len(enriched))
        return enriched
