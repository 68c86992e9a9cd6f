import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from role_model_matcher.api.schemas import RecommendRequest, RecommendResponse
from role_model_matcher.config import get_settings
from role_model_matcher.errors import ValidationError
from role_model_matcher.service.recommender import RecommendOutcome, RecommendService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()
app = FastAPI(title="role-model-matcher", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.cors_allow_origin] if settings.cors_allow_origin else [],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)
service = RecommendService(settings=settings)


def _to_response(outcome: RecommendOutcome) -> JSONResponse:
    return JSONResponse(
        status_code=outcome.status_code,
        content=outcome.payload.model_dump(exclude_none=True),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("recommend.rejected type=RequestValidationError errors=%d", len(exc.errors()))
    return _to_response(RecommendService.failure(400, ValidationError.public_message))


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@app.post("/api/recommend", response_model=RecommendResponse, response_model_exclude_none=True)
async def recommend(req: RecommendRequest) -> JSONResponse:
    outcome = await service.recommend(req)
    return _to_response(outcome)
