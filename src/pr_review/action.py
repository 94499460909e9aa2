# src/pr_review/action.py
"""One-shot runner for CI: review the pull request described by GITHUB_EVENT_PATH."""
import asyncio
import json
import logging
from pathlib import Path

from pr_review.config import Settings
from pr_review.models.event import PRDetails, pr_details_from_event
from pr_review.platforms.github import GitHubClient
from pr_review.providers import get_provider
from pr_review.review.engine import ReviewEngine


logger = logging.getLogger(__name__)


def load_event(path: str | None) -> PRDetails:
    if not path:
        raise ValueError("GITHUB_EVENT_PATH is not set")
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return pr_details_from_event(payload)


async def run(settings: Settings) -> int:
    pr = load_event(settings.github_event_path)
    provider = get_provider(settings)
    if provider is None:
        raise ValueError(f"No API key configured for provider {settings.default_provider}")

    engine = ReviewEngine(
        github=GitHubClient(token=settings.github_token, base_url=settings.github_api_url),
        provider=provider,
        review_body=settings.review_body,
        fail_fast=settings.fail_fast,
    )
    result = await engine.review_pr(pr)
    logger.info(f"Review finished: {result.comments_count} comments across {result.files_reviewed} files")
    return 0


def main() -> int:
    try:
        settings = Settings()
    except Exception as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Invalid configuration: {e}")
        return 1

    logging.basicConfig(level=settings.log_level.upper())

    try:
        return asyncio.run(run(settings))
    except Exception as e:
        logger.exception(f"Review failed: {e}")
        return 1
