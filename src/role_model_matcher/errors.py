"""Error taxonomy for the recommendation flow.

Each error carries the HTTP status it maps to and the message that may be
shown to the caller. Only 4xx errors expose their message; everything else is
reported with the generic server error while the detail stays in the logs.
"""

GENERIC_SERVER_ERROR = "Server error while looking for role models. Please try again."


class MatcherError(Exception):
    status_code = 500
    public_message = GENERIC_SERVER_ERROR

    @property
    def exposed(self) -> bool:
        return self.status_code < 500


class ValidationError(MatcherError):
    status_code = 400
    public_message = "Please describe the kind of future you want in a bit more detail."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.public_message)


class SafetyRejection(MatcherError):
    status_code = 400
    public_message = (
        "This app can only be used for positive, school-safe and work-safe goals "
        "(careers, learning, creativity, service, etc.). "
        "Try describing the kind of person you want to become or the impact you want to have, "
        "without harmful or explicit themes."
    )

    def __init__(self, categories: dict[str, bool] | None = None) -> None:
        self.categories = categories or {}
        flagged = sorted(name for name, hit in self.categories.items() if hit)
        super().__init__(f"moderation flagged input categories={flagged}")


class GenerationFormatError(MatcherError):
    """The generation provider returned text that is not a JSON object."""

    def __init__(self, message: str, raw: str) -> None:
        self.raw = raw
        super().__init__(message)


class EnrichmentFailure(MatcherError):
    """A single Wikipedia lookup failed; callers drop the candidate."""

    def __init__(self, title: str, reason: str) -> None:
        self.title = title
        self.reason = reason
        super().__init__(f"wikipedia lookup failed title={title} reason={reason}")


class UpstreamTransportError(MatcherError):
    """Moderation or generation call failed at the transport or provider level."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation} failed: {detail}")
