from role_model_matcher.api.schemas import RecommendRequest
from role_model_matcher.errors import ValidationError

MIN_FUTURE_CHARS = 20


def validate_request(request: RecommendRequest, min_future_chars: int = MIN_FUTURE_CHARS) -> None:
    """Reject requests whose ``future`` is missing or too short once trimmed."""
    future = (request.future or "").strip()
    if len(future) < min_future_chars:
        raise ValidationError(f"future too short chars={len(future)} min={min_future_chars}")
