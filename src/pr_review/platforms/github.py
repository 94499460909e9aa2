from typing import Any, Sequence
import httpx
from pr_review.models.review import Comment
from .base import GitPlatform


CONFIG_FILE = ".ai-review.yaml"


class GitHubClient(GitPlatform):
    def __init__(self, token: str, base_url: str = "https://api.github.com"):
        self.token = token
        self.api_url = base_url.rstrip("/")

    def _headers(self, accept: str = "application/vnd.github+json") -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": accept,
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def get_pr_diff(self, owner: str, repo: str, pull_number: int) -> str:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/pulls/{pull_number}",
                headers=self._headers(accept="application/vnd.github.v3.diff"),
                timeout=30.0,
            )
            response.raise_for_status()
            return response.text

    async def get_pr_info(self, owner: str, repo: str, pull_number: int) -> dict[str, Any]:
        """Get PR info including title, body and head ref."""
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/pulls/{pull_number}",
                headers=self._headers(),
                timeout=30.0,
            )
            response.raise_for_status()
            return response.json()

    async def get_repo_config(self, owner: str, repo: str, ref: str | None = None) -> str | None:
        """Get .ai-review.yaml content, returns None if not found."""
        params = {"ref": ref} if ref else None
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/contents/{CONFIG_FILE}",
                params=params,
                headers=self._headers(accept="application/vnd.github.raw+json"),
                timeout=30.0,
            )
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return response.text

    async def post_review(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        comments: Sequence[Comment],
        body: str,
    ) -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{self.api_url}/repos/{owner}/{repo}/pulls/{pull_number}/reviews",
                headers=self._headers(),
                json={
                    "body": body,
                    "event": "COMMENT",
                    "comments": [comment.model_dump() for comment in comments],
                },
                timeout=30.0,
            )
            response.raise_for_status()
