# src/pr_review/review/engine.py
import asyncio
import fnmatch
import logging
from dataclasses import dataclass
from typing import Sequence

import yaml

from pr_review.models.config import RepoConfig
from pr_review.models.event import PRDetails
from pr_review.models.review import Feedback
from pr_review.platforms.base import GitPlatform
from pr_review.providers.base import LLMProvider
from .assembler import assemble_review
from .parser import ParsedFile, parse_diff


logger = logging.getLogger(__name__)


@dataclass
class EngineReviewResult:
    """Result of running review on a pull request."""
    files_reviewed: int
    comments_count: int
    posted: bool


class ReviewEngine:
    def __init__(
        self,
        github: GitPlatform,
        provider: LLMProvider,
        review_body: str = "Automated review by Gemini AI",
        fail_fast: bool = True,
    ):
        self.github = github
        self.provider = provider
        self.review_body = review_body
        self.fail_fast = fail_fast

    async def review_pr(
        self,
        pr: PRDetails,
        config: RepoConfig | None = None,
        cancel: asyncio.Event | None = None,
    ) -> EngineReviewResult:
        """Run AI review on a pull request and post the comments as one review.

        Nothing is posted unless every hunk was assembled.
        """
        diff_text = await self.github.get_pr_diff(pr.owner, pr.repo, pr.pull_number)
        if config is None:
            config = await self.load_config(pr)

        files = [f for f in parse_diff(diff_text) if not self._is_excluded(f.path, config.exclude)]
        logger.info(
            f"Reviewing {pr.owner}/{pr.repo}#{pr.pull_number}: "
            f"{len(files)} files, {sum(len(f.hunks) for f in files)} hunks"
        )

        comments = await assemble_review(
            files,
            pr.title,
            pr.description,
            self._analyze,
            fail_fast=self.fail_fast,
            cancel=cancel,
        )

        if comments:
            await self.github.post_review(
                pr.owner, pr.repo, pr.pull_number, comments, self.review_body
            )
            logger.info(f"Posted review with {len(comments)} comments on #{pr.pull_number}")
        else:
            logger.info(f"No comments for #{pr.pull_number}, nothing posted")

        return EngineReviewResult(
            files_reviewed=self._count_reviewable(files),
            comments_count=len(comments),
            posted=bool(comments),
        )

    async def load_config(self, pr: PRDetails) -> RepoConfig:
        """Load .ai-review.yaml from repo or use defaults."""
        yaml_content = await self.github.get_repo_config(pr.owner, pr.repo, pr.head_ref)
        if yaml_content is None:
            return RepoConfig()

        try:
            data = yaml.safe_load(yaml_content) or {}
            return RepoConfig(**data)
        except Exception as e:
            logger.warning(f"Invalid .ai-review.yaml: {e}")
            return RepoConfig()

    async def _analyze(self, prompt: str) -> Sequence[Feedback]:
        result = await self.provider.review(prompt)
        return result.comments

    def _is_excluded(self, file_path: str, patterns: list[str]) -> bool:
        """Check if file matches any exclude pattern."""
        return any(fnmatch.fnmatch(file_path, pattern) for pattern in patterns)

    def _count_reviewable(self, files: list[ParsedFile]) -> int:
        return sum(1 for f in files if f.path and f.hunks)
