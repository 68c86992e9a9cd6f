import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from role_model_matcher.errors import GenerationFormatError
from role_model_matcher.logs import clip
from role_model_matcher.matching.prompts import build_matcher_prompt

logger = logging.getLogger(__name__)
RAW_LOG_LIMIT = 4000


@dataclass(frozen=True)
class Candidate:
    name: str
    wiki_title: str
    short_reason: str

    @property
    def is_complete(self) -> bool:
        return bool(self.name and self.wiki_title)

    @classmethod
    def from_raw(cls, item: Any) -> "Candidate":
        if not isinstance(item, dict):
            return cls(name="", wiki_title="", short_reason="")
        return cls(
            name=_text_field(item.get("name")),
            wiki_title=_text_field(item.get("wiki_title")),
            short_reason=_text_field(item.get("short_reason")),
        )


def _text_field(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    # Truthy scalars (e.g. a numeric page title) are kept as text; containers are not.
    if isinstance(value, (int, float)) and value:
        return str(value)
    return ""


class TextGenerator(Protocol):
    async def generate(self, prompt: str, temperature: float | None = None) -> str: ...


class MatchGenerator:
    """Asks the model for role models and parses its JSON answer."""

    def __init__(self, generator: TextGenerator, max_matches: int = 3, temperature: float = 1.0) -> None:
        self.generator = generator
        self.max_matches = max_matches
        self.temperature = temperature

    async def generate(
        self,
        future: str,
        stage: str | None = None,
        values: str | None = None,
        strengths: str | None = None,
    ) -> list[Candidate]:
        prompt = build_matcher_prompt(
            future,
            stage=stage,
            values=values,
            strengths=strengths,
        )
        raw = await self.generator.generate(prompt, temperature=self.temperature)
        candidates = self.parse(raw)
        logger.info(
            "matches.generated count=%d names=%s",
            len(candidates),
            ", ".join(candidate.name for candidate in candidates if candidate.name) or "none",
        )
        return candidates

    def parse(self, raw: str) -> list[Candidate]:
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.error("matches.parse_error detail=%s raw=%s", exc, clip(str(raw), RAW_LOG_LIMIT))
            raise GenerationFormatError("AI output was not valid JSON", raw=str(raw)) from exc

        if not isinstance(parsed, dict):
            logger.error(
                "matches.parse_error detail=top-level %s raw=%s",
                type(parsed).__name__,
                clip(str(raw), RAW_LOG_LIMIT),
            )
            raise GenerationFormatError("AI output was not a JSON object", raw=str(raw))

        matches = parsed.get("matches")
        if not isinstance(matches, list):
            if matches is not None:
                logger.warning("matches.ignored type=%s", type(matches).__name__)
            return []
        if len(matches) > self.max_matches:
            logger.info("matches.truncated received=%d kept=%d", len(matches), self.max_matches)
        return [Candidate.from_raw(item) for item in matches[: self.max_matches]]
