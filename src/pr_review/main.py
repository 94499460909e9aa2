# src/pr_review/main.py
import hashlib
import hmac
import logging
import re
from contextlib import asynccontextmanager
from functools import lru_cache
from fastapi import FastAPI, Header, HTTPException, BackgroundTasks, Request
from pydantic import BaseModel, model_validator

from pr_review.config import Settings
from pr_review.models.event import EventPayloadError, PRDetails, pr_details_from_event
from pr_review.platforms.github import GitHubClient
from pr_review.providers import LLMProvider, get_provider
from pr_review.review.engine import ReviewEngine


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

REVIEW_ACTIONS = ("opened", "synchronize", "reopened")
REVIEW_COMMAND = "/review"


@lru_cache
def get_settings() -> Settings:
    return Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.getLogger().setLevel(get_settings().log_level.upper())
    logger.info("PR Review starting...")
    yield
    logger.info("PR Review shutting down...")


app = FastAPI(title="PR Review", lifespan=lifespan)


class WebhookResponse(BaseModel):
    status: str
    message: str | None = None


class ReviewRequest(BaseModel):
    url: str | None = None
    owner: str | None = None
    repo: str | None = None
    pull_number: int | None = None

    @model_validator(mode="after")
    def check_params(self):
        if not self.url and not (self.owner and self.repo and self.pull_number):
            raise ValueError("Either url or owner+repo+pull_number required")
        return self


class ReviewResponse(BaseModel):
    status: str
    owner: str | None = None
    repo: str | None = None
    pull_number: int | None = None
    comments_posted: int | None = None
    error: str | None = None


def parse_github_pr_url(url: str) -> tuple[str, str, int]:
    """Parse GitHub PR URL -> (owner, repo, pull_number)."""
    match = re.match(r"https?://[^/]+/([^/]+)/([^/]+)/pull/(\d+)", url)
    if not match:
        raise ValueError(f"Invalid GitHub PR URL: {url}")
    return match.group(1), match.group(2), int(match.group(3))


def verify_signature(secret: str | None, body: bytes, signature: str | None) -> bool:
    """Check the X-Hub-Signature-256 header against the raw request body."""
    if not secret or not signature:
        return False
    expected = "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature)


def build_engine(settings: Settings, github: GitHubClient, provider: LLMProvider) -> ReviewEngine:
    return ReviewEngine(
        github=github,
        provider=provider,
        review_body=settings.review_body,
        fail_fast=settings.fail_fast,
    )


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


@app.post("/webhook/github", response_model=WebhookResponse)
async def github_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_github_event: str = Header(...),
    x_hub_signature_256: str | None = Header(None),
):
    settings = get_settings()
    raw_body = await request.body()

    if not verify_signature(settings.github_webhook_secret, raw_body, x_hub_signature_256):
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    body = await request.json()

    if x_github_event == "pull_request" and body.get("action") in REVIEW_ACTIONS:
        automatic = True
    elif (
        x_github_event == "issue_comment"
        and body.get("action") == "created"
        and REVIEW_COMMAND in ((body.get("comment") or {}).get("body") or "")
    ):
        automatic = False
    else:
        return WebhookResponse(status="ignored", message="Event not relevant")

    try:
        pr = pr_details_from_event(body)
    except EventPayloadError as e:
        logger.info(f"Ignoring {x_github_event} event: {e}")
        return WebhookResponse(status="ignored", message=str(e))

    background_tasks.add_task(run_review, pr=pr, automatic=automatic)
    return WebhookResponse(status="accepted", message="Review scheduled")


@app.post("/api/review", response_model=ReviewResponse)
async def trigger_review(request: ReviewRequest):
    """Manually trigger a review for a pull request."""
    settings = get_settings()
    github = GitHubClient(token=settings.github_token, base_url=settings.github_api_url)

    try:
        if request.url:
            owner, repo, pull_number = parse_github_pr_url(request.url)
        else:
            owner, repo, pull_number = request.owner, request.repo, request.pull_number

        provider = get_provider(settings)
        if not provider:
            return ReviewResponse(
                status="error",
                error="No LLM provider configured",
            )

        engine = build_engine(settings, github, provider)

        # Get PR info for title, description and head ref
        pr_info = await github.get_pr_info(owner, repo, pull_number)
        pr = PRDetails(
            owner=owner,
            repo=repo,
            pull_number=pull_number,
            title=pr_info.get("title", "") or "",
            description=pr_info.get("body", "") or "",
            head_ref=(pr_info.get("head") or {}).get("ref"),
        )

        result = await engine.review_pr(pr)

        return ReviewResponse(
            status="completed",
            owner=owner,
            repo=repo,
            pull_number=pull_number,
            comments_posted=result.comments_count,
        )

    except ValueError as e:
        return ReviewResponse(status="error", error=str(e))
    except Exception as e:
        logger.exception(f"Review failed: {e}")
        return ReviewResponse(status="error", error=str(e))


async def run_review(pr: PRDetails, automatic: bool = False):
    """Background task to run the review."""
    settings = get_settings()

    provider = get_provider(settings)
    if not provider:
        logger.error("No LLM provider configured")
        return

    github = GitHubClient(token=settings.github_token, base_url=settings.github_api_url)
    engine = build_engine(settings, github, provider)

    try:
        config = await engine.load_config(pr)
        if automatic and not config.auto_review:
            logger.info(f"auto_review disabled for {pr.owner}/{pr.repo}, skipping #{pr.pull_number}")
            return

        await engine.review_pr(pr, config=config)
        logger.info(f"Review completed for PR #{pr.pull_number}")
    except Exception as e:
        logger.exception(f"Review failed for PR #{pr.pull_number}: {e}")
