# src/pr_review/providers/__init__.py
from pr_review.config import Settings
from .base import LLMProvider, parse_review_result
from .gemini import GeminiProvider
from .openai_compat import OpenAIProvider


def get_provider(settings: Settings) -> LLMProvider | None:
    """Get LLM provider based on settings."""
    if settings.default_provider == "gemini" and settings.gemini_api_key:
        return GeminiProvider(api_key=settings.gemini_api_key, model=settings.gemini_model)
    elif settings.default_provider == "openai" and settings.openai_api_key:
        return OpenAIProvider(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
        )
    return None


__all__ = ["LLMProvider", "parse_review_result", "GeminiProvider", "OpenAIProvider", "get_provider"]
