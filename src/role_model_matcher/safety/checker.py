import logging
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SafetyVerdict:
    flagged: bool
    categories: dict[str, bool] = field(default_factory=dict)

    def flagged_categories(self) -> list[str]:
        return sorted(name for name, hit in self.categories.items() if hit)


class Moderator(Protocol):
    async def moderate(self, text: str) -> SafetyVerdict: ...


class SafetyChecker:
    """Runs moderation over the raw user input before anything is generated."""

    def __init__(self, moderator: Moderator) -> None:
        self.moderator = moderator

    async def check(
        self,
        stage: str | None = None,
        future: str | None = None,
        values: str | None = None,
        strengths: str | None = None,
    ) -> SafetyVerdict:
        text = self.combine_text(stage, future, values, strengths)
        if not text.strip():
            logger.info("safety.skipped reason=empty_text")
            return SafetyVerdict(flagged=False)

        verdict = await self.moderator.moderate(text)
        logger.info(
            "safety.verdict flagged=%s categories=%s",
            verdict.flagged,
            verdict.flagged_categories(),
        )
        return verdict

    @staticmethod
    def combine_text(*fields: str | None) -> str:
        return "\n".join(value for value in fields if value)
