import logging
from dataclasses import dataclass, field
from typing import Any

from role_model_matcher.api.schemas import EnrichedMatch
from role_model_matcher.config import Settings, get_settings
from role_model_matcher.enrichment.enricher import SummaryEnricher, SummaryLookup
from role_model_matcher.errors import SafetyRejection
from role_model_matcher.matching.generator import Candidate, MatchGenerator, TextGenerator
from role_model_matcher.providers.encyclopedia.wikipedia import WikipediaSummaryClient
from role_model_matcher.providers.llm.openai_client import OpenAIProvider
from role_model_matcher.safety.checker import Moderator, SafetyChecker, SafetyVerdict

logger = logging.getLogger(__name__)


@dataclass
class RecommendationResult:
    verdict: SafetyVerdict
    candidates: list[Candidate] = field(default_factory=list)
    matches: list[EnrichedMatch] = field(default_factory=list)


class RecommendationWorkflow:
    """Safety check, match generation and enrichment as LangGraph nodes.

    The graph stops right after the safety node when the input is flagged, so
    the generation provider is never called for rejected input.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        moderator: Moderator | None = None,
        text_generator: TextGenerator | None = None,
        summary_lookup: SummaryLookup | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        provider: OpenAIProvider | None = None
        if moderator is None or text_generator is None:
            provider = OpenAIProvider(self.settings)
        self.safety_checker = SafetyChecker(moderator or provider)
        self.match_generator = MatchGenerator(
            text_generator or provider,
            max_matches=self.settings.max_matches,
            temperature=self.settings.llm_temperature,
        )
        self.enricher = SummaryEnricher(summary_lookup or WikipediaSummaryClient(self.settings))

    async def run(
        self,
        future: str,
        stage: str | None = None,
        values: str | None = None,
        strengths: str | None = None,
    ) -> RecommendationResult:
        final_state = await self._run_with_langgraph_async(
            {
                "stage": stage,
                "future": future,
                "values": values,
                "strengths": strengths,
            }
        )
        verdict = final_state["verdict"]
        if verdict.flagged:
            raise SafetyRejection(verdict.categories)
        return RecommendationResult(
            verdict=verdict,
            candidates=list(final_state.get("candidates", [])),
            matches=list(final_state.get("matches", [])),
        )

    async def _run_with_langgraph_async(self, inputs: dict[str, str | None]) -> dict[str, Any]:
        from typing import TypedDict
        from langgraph.graph import END, START, StateGraph

        class WorkflowState(TypedDict):
            stage: str | None
            future: str
            values: str | None
            strengths: str | None
            verdict: SafetyVerdict
            candidates: list[Candidate]
            matches: list[EnrichedMatch]

        async def safety_node(state: WorkflowState) -> dict[str, Any]:
            logger.info("safety")
            verdict = await self.safety_checker.check(
                state["stage"],
                state["future"],
                state["values"],
                state["strengths"],
            )
            return {"verdict": verdict}

        def route_after_safety(state: WorkflowState) -> str:
            return "rejected" if state["verdict"].flagged else "generate"

        async def generate_node(state: WorkflowState) -> dict[str, Any]:
            logger.info("generate")
            candidates = await self.match_generator.generate(
                state["future"],
                stage=state["stage"],
                values=state["values"],
                strengths=state["strengths"],
            )
            return {"candidates": candidates}

        async def enrich_node(state: WorkflowState) -> dict[str, Any]:
            logger.info("enrich")
            matches = await self.enricher.enrich(state["candidates"])
            return {"matches": matches}

        graph = StateGraph(WorkflowState)
        graph.add_node("safety_step", safety_node)
        graph.add_node("generate_step", generate_node)
        graph.add_node("enrich_step", enrich_node)
        graph.add_edge(START, "safety_step")
        graph.add_conditional_edges(
            "safety_step",
            route_after_safety,
            {"rejected": END, "generate": "generate_step"},
        )
        graph.add_edge("generate_step", "enrich_step")
        graph.add_edge("enrich_step", END)

        app = graph.compile()
        return await app.ainvoke(
            {
                **inputs,
                "verdict": SafetyVerdict(flagged=False),
                "candidates": [],
                "matches": [],
            }
        )
