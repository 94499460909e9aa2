# src/pr_review/config.py
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", populate_by_name=True, extra="ignore")

    # GitHub
    github_token: str = Field(validation_alias=AliasChoices("INPUT_GITHUB_TOKEN", "GITHUB_TOKEN", "github_token"))
    github_api_url: str = "https://api.github.com"
    github_webhook_secret: str | None = None
    github_event_path: str | None = None

    # LLM Providers
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_GEMINI_API_KEY", "GEMINI_API_KEY", "gemini_api_key"),
    )
    gemini_model: str = "gemini-1.5-flash-002"
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_model: str = "gpt-4o-mini"

    # Defaults
    default_provider: str = "gemini"
    review_body: str = "Automated review by Gemini AI"
    fail_fast: bool = True
    log_level: str = "INFO"
