import json

import pytest

from role_model_matcher.config import Settings
from role_model_matcher.errors import EnrichmentFailure
from role_model_matcher.providers.encyclopedia.wikipedia import WikiSummary
from role_model_matcher.safety.checker import SafetyVerdict
from role_model_matcher.workflow.recommendation import RecommendationWorkflow


class FakeModerator:
    def __init__(self, flagged: bool = False, categories: dict[str, bool] | None = None) -> None:
        self.flagged = flagged
        self.categories = categories or {}
        self.calls: list[str] = []

    async def moderate(self, text: str) -> SafetyVerdict:
        self.calls.append(text)
        return SafetyVerdict(flagged=self.flagged, categories=dict(self.categories))


class FakeGenerator:
    def __init__(self, raw: str) -> None:
        self.raw = raw
        self.calls: list[dict] = []

    async def generate(self, prompt: str, temperature: float | None = None) -> str:
        self.calls.append({"prompt": prompt, "temperature": temperature})
        return self.raw


class FakeLookup:
    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.calls: list[str] = []

    async def lookup_summary(self, title: str) -> WikiSummary:
        self.calls.append(title)
        if title in self.failing:
            raise EnrichmentFailure(title, "status_code=404")
        return WikiSummary(
            extract=f"{title.replace('_', ' ')} is a notable person.",
            url=f"https://en.wikipedia.org/wiki/{title}",
        )


def matches_json(*people: tuple[str, str]) -> str:
    return json.dumps(
        {
            "matches": [
                {"name": name, "wiki_title": title, "short_reason": f"{name} fits your goals."}
                for name, title in people
            ]
        }
    )


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def build_workflow(settings: Settings):
    def _build(
        moderator: FakeModerator | None = None,
        generator: FakeGenerator | None = None,
        lookup: FakeLookup | None = None,
    ) -> RecommendationWorkflow:
        return RecommendationWorkflow(
            settings,
            moderator=moderator or FakeModerator(),
            text_generator=generator or FakeGenerator(matches_json()),
            summary_lookup=lookup or FakeLookup(),
        )

    return _build
