import logging
from typing import Any

from role_model_matcher.config import Settings
from role_model_matcher.errors import UpstreamTransportError
from role_model_matcher.logs import clip
from role_model_matcher.safety.checker import SafetyVerdict

logger = logging.getLogger(__name__)
ERROR_LOG_LIMIT = 1000


class OpenAIProvider:
    """Moderation and text generation against an OpenAI-compatible endpoint.

    Clients are created on first use so the app can start (and be tested)
    without a configured API key.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.llm_model = settings.openai_model.strip()
        self.moderation_model = settings.openai_moderation_model.strip()
        self._llm: Any | None = None
        self._client: Any | None = None

    async def moderate(self, text: str) -> SafetyVerdict:
        logger.info("moderation.request model=%s chars=%d", self.moderation_model, len(text))
        try:
            response = await self._get_client().moderations.create(model=self.moderation_model, input=text)
        except Exception as exc:
            detail = self._extract_error_detail(exc)
            logger.error(
                "moderation.error model=%s type=%s detail=%s",
                self.moderation_model,
                exc.__class__.__name__,
                detail,
            )
            raise UpstreamTransportError("moderation", detail) from exc

        result = response.results[0]
        categories = self._categories_dict(getattr(result, "categories", None))
        logger.info("moderation.response flagged=%s", bool(result.flagged))
        return SafetyVerdict(flagged=bool(result.flagged), categories=categories)

    async def generate(self, prompt: str, temperature: float | None = None) -> str:
        llm = self._get_llm()
        if temperature is not None:
            llm = llm.bind(temperature=temperature)
        logger.info("llm.request.full model=%s temperature=%s\n%s", self.llm_model, temperature, prompt)
        try:
            response = await llm.ainvoke(prompt)
        except Exception as exc:
            detail = self._extract_error_detail(exc)
            logger.error(
                "llm.error model=%s type=%s detail=%s",
                self.llm_model,
                exc.__class__.__name__,
                detail,
            )
            raise UpstreamTransportError("generation", detail) from exc
        text = self._message_text(getattr(response, "content", response))
        logger.info("llm.response.full model=%s\n%s", self.llm_model, text)
        return text

    def _get_llm(self):
        if self._llm is None:
            from langchain_openai import ChatOpenAI

            model_kwargs: dict[str, Any] = {}
            if self.settings.llm_json_mode:
                model_kwargs["response_format"] = {"type": "json_object"}
            self._llm = ChatOpenAI(
                model=self.llm_model,
                api_key=self.settings.openai_api_key or None,
                base_url=self.settings.openai_base_url,
                temperature=self.settings.llm_temperature,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=self.settings.llm_num_retries,
                model_kwargs=model_kwargs,
            )
        return self._llm

    def _get_client(self):
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key or None,
                base_url=self.settings.openai_base_url,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=self.settings.llm_num_retries,
            )
        return self._client

    @staticmethod
    def _categories_dict(categories: Any) -> dict[str, bool]:
        if categories is None:
            return {}
        if hasattr(categories, "model_dump"):
            categories = categories.model_dump()
        if not isinstance(categories, dict):
            return {}
        return {str(name): bool(hit) for name, hit in categories.items() if hit is not None}

    @staticmethod
    def _message_text(content: Any) -> str:
        if isinstance(content, str):
            return content.strip()
        if isinstance(content, list):
            parts: list[str] = []
            for item in content:
                if isinstance(item, dict) and "text" in item:
                    parts.append(str(item["text"]))
                else:
                    parts.append(str(item))
            return "\n".join(parts).strip()
        return str(content).strip()

    def _extract_error_detail(self, exc: Exception) -> str:
        status_code = getattr(exc, "status_code", None)
        message = getattr(exc, "message", None) or str(exc)
        body = getattr(exc, "body", None)
        details = [f"status_code={status_code}" if status_code is not None else ""]
        if body is not None:
            details.append(f"body={body}")
        details.append(f"message={message}")
        return clip(" ".join([part for part in details if part]).strip(), ERROR_LOG_LIMIT)
