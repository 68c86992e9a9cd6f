import logging
from dataclasses import dataclass

from role_model_matcher.api.schemas import EnrichedMatch, RecommendRequest, RecommendResponse
from role_model_matcher.config import Settings, get_settings
from role_model_matcher.errors import GENERIC_SERVER_ERROR, MatcherError
from role_model_matcher.validation import validate_request
from role_model_matcher.workflow.recommendation import RecommendationWorkflow

logger = logging.getLogger(__name__)


@dataclass
class RecommendOutcome:
    status_code: int
    payload: RecommendResponse


class RecommendService:
    def __init__(
        self,
        workflow: RecommendationWorkflow | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.workflow = workflow or RecommendationWorkflow(self.settings)

    async def recommend(self, request: RecommendRequest) -> RecommendOutcome:
        try:
            validate_request(request, min_future_chars=self.settings.min_future_chars)
            result = await self.workflow.run(
                request.future or "",
                stage=request.stage,
                values=request.values,
                strengths=request.strengths,
            )
        except MatcherError as exc:
            if exc.exposed:
                logger.info("recommend.rejected type=%s detail=%s", exc.__class__.__name__, exc)
                return self.failure(exc.status_code, exc.public_message)
            logger.exception("recommend.failed type=%s", exc.__class__.__name__)
            return self.failure(exc.status_code, GENERIC_SERVER_ERROR)
        except Exception:
            logger.exception("recommend.failed type=unexpected")
            return self.failure(500, GENERIC_SERVER_ERROR)

        logger.info(
            "recommend.meta candidates=%d matches=%d",
            len(result.candidates),
            len(result.matches),
        )
        return self.success(result.matches)

    @staticmethod
    def success(matches: list[EnrichedMatch]) -> RecommendOutcome:
        return RecommendOutcome(status_code=200, payload=RecommendResponse(ok=True, matches=list(matches)))

    @staticmethod
    def failure(status_code: int, message: str) -> RecommendOutcome:
        return RecommendOutcome(status_code=status_code, payload=RecommendResponse(ok=False, error=message))
