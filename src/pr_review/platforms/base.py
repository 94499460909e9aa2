from abc import ABC, abstractmethod
from typing import Sequence

from pr_review.models.review import Comment


class GitPlatform(ABC):
    @abstractmethod
    async def get_pr_diff(self, owner: str, repo: str, pull_number: int) -> str:
        pass

    @abstractmethod
    async def get_repo_config(self, owner: str, repo: str, ref: str | None = None) -> str | None:
        pass

    @abstractmethod
    async def post_review(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        comments: Sequence[Comment],
        body: str,
    ) -> None:
        pass
