import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from role_model_matcher.config import Settings
from role_model_matcher.errors import EnrichmentFailure

logger = logging.getLogger(__name__)
# Characters encodeURIComponent leaves alone on top of quote()'s unreserved set.
TITLE_SAFE_CHARS = "!'()*"


@dataclass(frozen=True)
class WikiSummary:
    extract: str
    url: str


class WikipediaSummaryClient:
    """Wikipedia REST summary lookups by exact page title.

    See https://en.wikipedia.org/api/rest_v1/ (page/summary) and
    https://www.mediawiki.org/wiki/API:Etiquette for the User-Agent rule.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.summary_url = settings.wikipedia_summary_url
        self.page_url = settings.wikipedia_page_url
        self.timeout = settings.wikipedia_timeout_seconds
        self.headers = {
            "User-Agent": settings.wikipedia_user_agent,
            "Accept": "application/json",
        }
        self.transport = transport

    async def lookup_summary(self, title: str) -> WikiSummary:
        logger.info("wikipedia.request title=%r", title)
        try:
            url = f"{self.summary_url}/{self.encode_title(title)}"
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.headers,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                http_response = await client.get(url)
                http_response.raise_for_status()
                data = http_response.json()
        except httpx.HTTPStatusError as exc:
            raise EnrichmentFailure(title, f"status_code={exc.response.status_code}") from exc
        except (UnicodeEncodeError, httpx.InvalidURL) as exc:
            raise EnrichmentFailure(title, f"invalid title: {exc.__class__.__name__}") from exc
        except httpx.HTTPError as exc:
            raise EnrichmentFailure(title, f"{exc.__class__.__name__}: {exc}") from exc
        except ValueError as exc:
            raise EnrichmentFailure(title, "invalid json body") from exc

        if not isinstance(data, dict):
            raise EnrichmentFailure(title, "unexpected payload shape")

        summary = WikiSummary(
            extract=str(data.get("extract") or ""),
            url=self._canonical_url(data) or self.fallback_url(title),
        )
        logger.info("wikipedia.response title=%s extract_chars=%d url=%s", title, len(summary.extract), summary.url)
        return summary

    def fallback_url(self, title: str) -> str:
        return f"{self.page_url}/{self.encode_title(title)}"

    @staticmethod
    def encode_title(title: str) -> str:
        return quote(title, safe=TITLE_SAFE_CHARS)

    @staticmethod
    def _canonical_url(data: dict[str, Any]) -> str:
        content_urls = data.get("content_urls")
        if not isinstance(content_urls, dict):
            return ""
        desktop = content_urls.get("desktop")
        if not isinstance(desktop, dict):
            return ""
        page = desktop.get("page")
        return page if isinstance(page, str) else ""
