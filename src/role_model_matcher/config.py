from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "role-model-matcher/0.1.0 (https://github.com/role-model-matcher; contact@example.com)"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    openai_moderation_model: str = Field(default="omni-moderation-latest", alias="OPENAI_MODERATION_MODEL")
    llm_temperature: float = Field(default=1.0, alias="LLM_TEMPERATURE")
    llm_json_mode: bool = Field(default=True, alias="LLM_JSON_MODE")
    llm_timeout_seconds: float = Field(default=60.0, alias="LLM_TIMEOUT_SECONDS")
    llm_num_retries: int = Field(default=0, alias="LLM_NUM_RETRIES")

    wikipedia_summary_url: str = Field(
        default="https://en.wikipedia.org/api/rest_v1/page/summary",
        alias="WIKIPEDIA_SUMMARY_URL",
    )
    wikipedia_page_url: str = Field(default="https://en.wikipedia.org/wiki", alias="WIKIPEDIA_PAGE_URL")
    wikipedia_timeout_seconds: float = Field(default=30.0, alias="WIKIPEDIA_TIMEOUT_SECONDS")
    wikipedia_user_agent: str = Field(default=DEFAULT_USER_AGENT, alias="WIKIPEDIA_USER_AGENT")

    max_matches: int = Field(default=3, alias="MAX_MATCHES")
    min_future_chars: int = Field(default=20, alias="MIN_FUTURE_CHARS")

    cors_allow_origin: str = Field(
        default="https://dynamic-shortbread-0d370c.netlify.app",
        alias="CORS_ALLOW_ORIGIN",
    )
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    def model_post_init(self, __context: Any) -> None:  # type: ignore[override]
        self.wikipedia_summary_url = self.wikipedia_summary_url.strip().rstrip("/")
        self.wikipedia_page_url = self.wikipedia_page_url.strip().rstrip("/")
        self.cors_allow_origin = self.cors_allow_origin.strip()
        self.max_matches = max(self.max_matches, 0)
        self.llm_num_retries = max(self.llm_num_retries, 0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
