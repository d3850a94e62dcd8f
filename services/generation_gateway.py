import json
import logging
import re
from typing import Any

import httpx

from core.config import settings
from core.errors import UpstreamFailure

logger = logging.getLogger(__name__)

JSON_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)


def extract_json_array(text: str) -> list | None:
    """Decode the first ``[`` ... last ``]`` span of ``text``.

    Returns None when there is no such span or it is not a JSON list.
    """
    match = JSON_ARRAY_RE.search(text or "")
    if not match:
        return None
    try:
        value = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, list) else None


def split_lines(text: str) -> list[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


class GenerationGateway:
    """Thin client for the Gemini ``generateContent`` endpoint."""

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str,
        base_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls) -> "GenerationGateway":
        return cls(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout=settings.GENERATION_TIMEOUT_SECONDS,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate(self, prompt: str, *, temperature: float = 0.7, max_tokens: int = 1024) -> str:
        if not self.api_key:
            raise UpstreamFailure("Generation API key not configured")

        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": temperature, "maxOutputTokens": max_tokens},
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                r = await client.post(
                    self.endpoint,
                    # kept out of the URL so request logging never records it
                    headers={"Content-Type": "application/json", "x-goog-api-key": self.api_key},
                    json=body,
                )
            except httpx.TimeoutException as exc:
                logger.error("Generation request timed out after %ss", self.timeout)
                raise UpstreamFailure("Generation service timed out") from exc
            except httpx.HTTPError as exc:
                logger.error("Generation request failed: %s", exc)
                raise UpstreamFailure("Generation service is unreachable") from exc

        if r.status_code != 200:
            logger.error("Generation request failed with status %s", r.status_code)
            raise UpstreamFailure(f"Generation request failed with status {r.status_code}")

        return self._extract_text(r)

    @staticmethod
    def _extract_text(response: httpx.Response) -> str:
        try:
            data: Any = response.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise UpstreamFailure("Generation service returned an unexpected payload") from exc
        if not isinstance(text, str):
            raise UpstreamFailure("Generation service returned an unexpected payload")
        return text
