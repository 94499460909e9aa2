# src/pr_review/providers/openai_compat.py
import logging
from openai import AsyncOpenAI
from .base import LLMProvider, parse_review_result
from pr_review.models.review import ReviewResult


logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """Any endpoint speaking the OpenAI chat completions API."""

    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, base_url: str | None = None):
        self.api_key = api_key
        self.model = model
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def review(self, prompt: str) -> ReviewResult:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.2,
        )

        text = response.choices[0].message.content or ""
        logger.debug(f"OpenAI response length: {len(text)} chars")

        return parse_review_result(text)
