import asyncio
import logging

from conftest import FakeLookup

from role_model_matcher.enrichment.enricher import SummaryEnricher
from role_model_matcher.matching.generator import Candidate


def _candidate(name: str, title: str) -> Candidate:
    return Candidate(name=name, wiki_title=title, short_reason=f"{name} reason")


def test_failed_lookup_drops_only_that_candidate(caplog) -> None:
    lookup = FakeLookup(failing={"B_Title"})
    enricher = SummaryEnricher(lookup)
    candidates = [_candidate("A", "A_Title"), _candidate("B", "B_Title"), _candidate("C", "C_Title")]

    with caplog.at_level(logging.WARNING):
        matches = asyncio.run(enricher.enrich(candidates))

    assert [match.name for match in matches] == ["A", "C"]
    assert lookup.calls == ["A_Title", "B_Title", "C_Title"]
    assert any("B_Title" in record.getMessage() for record in caplog.records)


def test_incomplete_candidates_are_skipped_without_lookup() -> None:
    lookup = FakeLookup()
    enricher = SummaryEnricher(lookup)
    candidates = [_candidate("No Title", ""), _candidate("", "No_Name"), _candidate("Ok", "Ok_Title")]

    matches = asyncio.run(enricher.enrich(candidates))

    assert [match.wiki_title for match in matches] == ["Ok_Title"]
    assert lookup.calls == ["Ok_Title"]


def test_enriched_match_fields() -> None:
    enricher = SummaryEnricher(FakeLookup())

    matches = asyncio.run(enricher.enrich([_candidate("Tu Youyou", "Tu_Youyou")]))

    match = matches[0]
    assert match.reason == "Tu Youyou reason"
    assert match.wiki_summary == "Tu Youyou is a notable person."
    assert match.wiki_url == "https://en.wikipedia.org/wiki/Tu_Youyou"
