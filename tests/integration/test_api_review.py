# tests/integration/test_api_review.py
import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import patch, AsyncMock
from pr_review.main import app, parse_github_pr_url, run_review, verify_signature
from pr_review.models.config import RepoConfig
from pr_review.models.event import PRDetails
from pr_review.models.review import Feedback, ReviewResult


DIFF = "diff --git a/x.go b/x.go\n--- a/x.go\n+++ b/x.go\n@@ -1,2 +1,2 @@\n-old\n+new\n"


def test_parse_github_pr_url_valid():
    assert parse_github_pr_url("https://github.com/octo/repo/pull/123") == ("octo", "repo", 123)


def test_parse_github_pr_url_invalid():
    with pytest.raises(ValueError):
        parse_github_pr_url("https://gitlab.com/user/repo/-/merge_requests/123")


def test_verify_signature_requires_secret():
    assert verify_signature(None, b"{}", "sha256=abc") is False
    assert verify_signature("s", b"{}", None) is False


@pytest.fixture
def mock_github():
    github = AsyncMock()
    github.get_pr_info.return_value = {"title": "Swap", "body": None, "head": {"ref": "feature"}}
    github.get_pr_diff.return_value = DIFF
    github.get_repo_config.return_value = None
    return github


@pytest.mark.asyncio
async def test_trigger_review_by_url(mock_github):
    transport = ASGITransport(app=app)

    mock_provider = AsyncMock()
    mock_provider.review.return_value = ReviewResult(comments=[Feedback(line=2, body="Why?")])

    with patch("pr_review.main.get_settings") as mock_settings, \
         patch("pr_review.main.GitHubClient") as mock_github_cls, \
         patch("pr_review.main.get_provider") as mock_get_provider:

        mock_settings.return_value.fail_fast = True
        mock_settings.return_value.review_body = "Automated review by Gemini AI"
        mock_github_cls.return_value = mock_github
        mock_get_provider.return_value = mock_provider

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/api/review",
                json={"url": "https://github.com/octo/repo/pull/7"},
            )

    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert response.json()["comments_posted"] == 1
    mock_github.get_pr_diff.assert_awaited_once_with("octo", "repo", 7)
    mock_github.post_review.assert_awaited_once()


@pytest.mark.asyncio
async def test_trigger_review_without_provider(mock_github):
    transport = ASGITransport(app=app)

    with patch("pr_review.main.get_settings"), \
         patch("pr_review.main.GitHubClient") as mock_github_cls, \
         patch("pr_review.main.get_provider") as mock_get_provider:

        mock_github_cls.return_value = mock_github
        mock_get_provider.return_value = None

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/api/review",
                json={"owner": "octo", "repo": "repo", "pull_number": 7},
            )

    assert response.json() == {
        "status": "error",
        "owner": None,
        "repo": None,
        "pull_number": None,
        "comments_posted": None,
        "error": "No LLM provider configured",
    }


@pytest.mark.asyncio
async def test_trigger_review_requires_target():
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/api/review", json={"owner": "octo"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_run_review_respects_auto_review(mock_github):
    mock_provider = AsyncMock()
    pr = PRDetails(owner="octo", repo="repo", pull_number=7)

    with patch("pr_review.main.get_settings"), \
         patch("pr_review.main.GitHubClient") as mock_github_cls, \
         patch("pr_review.main.get_provider") as mock_get_provider, \
         patch("pr_review.main.ReviewEngine.load_config", new=AsyncMock(return_value=RepoConfig(auto_review=False))):

        mock_github_cls.return_value = mock_github
        mock_get_provider.return_value = mock_provider

        await run_review(pr, automatic=True)

    mock_github.get_pr_diff.assert_not_awaited()
    mock_provider.review.assert_not_awaited()
