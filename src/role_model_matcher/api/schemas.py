from pydantic import BaseModel, Field


class RecommendRequest(BaseModel):
    stage: str | None = Field(default=None, description="Life stage, e.g. student or career changer.")
    future: str | None = Field(
        default=None,
        description="The future the user wants; at least 20 characters after trimming.",
    )
    values: str | None = Field(default=None, description="Values that matter to the user.")
    strengths: str | None = Field(default=None, description="The user's strengths.")


class EnrichedMatch(BaseModel):
    name: str
    wiki_title: str
    reason: str
    wiki_summary: str
    wiki_url: str


class RecommendResponse(BaseModel):
    ok: bool
    matches: list[EnrichedMatch] | None = None
    error: str | None = None
