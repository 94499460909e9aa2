# tests/integration/test_webhook.py
import hashlib
import hmac
import json
import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import patch
from pr_review.main import app


SECRET = "test-secret"
REPOSITORY = {"name": "repo", "full_name": "octo/repo", "owner": {"login": "octo"}}


def _signed(payload: dict, secret: str = SECRET) -> tuple[bytes, str]:
    body = json.dumps(payload).encode()
    signature = "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return body, signature


async def _post(event: str, payload: dict, secret: str = SECRET):
    body, signature = _signed(payload, secret)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.post(
            "/webhook/github",
            content=body,
            headers={
                "Content-Type": "application/json",
                "X-GitHub-Event": event,
                "X-Hub-Signature-256": signature,
            },
        )


@pytest.fixture
def settings():
    with patch("pr_review.main.get_settings") as mock_settings:
        mock_settings.return_value.github_webhook_secret = SECRET
        yield mock_settings.return_value


@pytest.mark.asyncio
async def test_webhook_rejects_invalid_signature(settings):
    response = await _post("pull_request", {"action": "opened"}, secret="wrong-secret")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_webhook_accepts_pull_request_event(settings):
    payload = {
        "action": "opened",
        "pull_request": {"number": 1, "title": "Test PR", "body": "", "head": {"ref": "feature", "sha": "abc"}},
        "repository": REPOSITORY,
    }

    with patch("pr_review.main.run_review") as mock_run:
        response = await _post("pull_request", payload)

    assert response.status_code == 200
    assert response.json()["status"] == "accepted"
    pr = mock_run.call_args.kwargs["pr"]
    assert (pr.owner, pr.repo, pr.pull_number) == ("octo", "repo", 1)
    assert mock_run.call_args.kwargs["automatic"] is True


@pytest.mark.asyncio
async def test_webhook_triggers_on_review_command(settings):
    payload = {
        "action": "created",
        "issue": {"number": 2, "title": "Test PR", "pull_request": {"url": "x"}},
        "comment": {"body": "please /review"},
        "repository": REPOSITORY,
    }

    with patch("pr_review.main.run_review") as mock_run:
        response = await _post("issue_comment", payload)

    assert response.json()["status"] == "accepted"
    assert mock_run.call_args.kwargs["automatic"] is False


@pytest.mark.asyncio
async def test_webhook_ignores_other_events(settings):
    with patch("pr_review.main.run_review") as mock_run:
        closed = await _post("pull_request", {"action": "closed", "repository": REPOSITORY})
        ping = await _post("ping", {"zen": "Design for failure."})

    assert closed.json()["status"] == "ignored"
    assert ping.json()["status"] == "ignored"
    mock_run.assert_not_called()


@pytest.mark.asyncio
async def test_webhook_ignores_review_command_on_issue(settings):
    payload = {
        "action": "created",
        "issue": {"number": 3, "title": "Bug"},
        "comment": {"body": "/review"},
        "repository": REPOSITORY,
    }

    with patch("pr_review.main.run_review") as mock_run:
        response = await _post("issue_comment", payload)

    assert response.json()["status"] == "ignored"
    mock_run.assert_not_called()
