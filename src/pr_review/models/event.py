# src/pr_review/models/event.py
"""GitHub event payloads.

Reviews are triggered either by a ``pull_request`` event or by an
``issue_comment`` event on a pull request. The action runner may also be
handed a flat payload that already carries the pull request details.
"""
from typing import Any
from pydantic import BaseModel, ValidationError


class EventPayloadError(ValueError):
    """Raised when a payload matches none of the known event shapes."""


class GitHubUser(BaseModel):
    login: str


class GitHubRepository(BaseModel):
    name: str
    full_name: str
    owner: GitHubUser


class GitHubRef(BaseModel):
    ref: str
    sha: str


class GitHubPullRequest(BaseModel):
    number: int
    title: str
    body: str | None = None
    head: GitHubRef | None = None


class GitHubPullRequestEvent(BaseModel):
    action: str
    pull_request: GitHubPullRequest
    repository: GitHubRepository


class GitHubIssue(BaseModel):
    number: int
    title: str
    body: str | None = None
    pull_request: dict[str, Any] | None = None  # present only for PRs


class GitHubIssueComment(BaseModel):
    body: str


class GitHubIssueCommentEvent(BaseModel):
    action: str
    issue: GitHubIssue
    comment: GitHubIssueComment
    repository: GitHubRepository


class PRDetails(BaseModel):
    owner: str
    repo: str
    pull_number: int
    title: str = ""
    description: str = ""
    head_ref: str | None = None


def pr_details_from_event(payload: dict[str, Any]) -> PRDetails:
    """Extract pull request details from any of the supported payload shapes."""
    if "pull_request" in payload:
        try:
            event = GitHubPullRequestEvent(**payload)
        except ValidationError as e:
            raise EventPayloadError(f"Invalid pull_request event: {e}") from e
        pr = event.pull_request
        return PRDetails(
            owner=event.repository.owner.login,
            repo=event.repository.name,
            pull_number=pr.number,
            title=pr.title,
            description=pr.body or "",
            head_ref=pr.head.ref if pr.head else None,
        )

    if "issue" in payload:
        try:
            comment_event = GitHubIssueCommentEvent(**payload)
        except ValidationError as e:
            raise EventPayloadError(f"Invalid issue_comment event: {e}") from e
        issue = comment_event.issue
        if issue.pull_request is None:
            raise EventPayloadError(f"Issue #{issue.number} is not a pull request")
        return PRDetails(
            owner=comment_event.repository.owner.login,
            repo=comment_event.repository.name,
            pull_number=issue.number,
            title=issue.title,
            description=issue.body or "",
        )

    try:
        return PRDetails(**payload)
    except (ValidationError, TypeError) as e:
        raise EventPayloadError(f"Unrecognized event payload: {e}") from e
