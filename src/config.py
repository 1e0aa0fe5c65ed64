"""Configuration for the AI PR Reviewer."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # App
    environment: str = Field(default="development", env="ENVIRONMENT")
    debug: bool = Field(default=True, env="DEBUG")
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=3000, env="PORT")

    # LLM - OpenRouter (multi-provider gateway)
    openrouter_api_key: Optional[str] = Field(default=None, env="OPENROUTER_API_KEY")
    review_model: str = Field(default="claude-sonnet-4", env="REVIEW_MODEL")
    model_timeout_seconds: float = Field(default=60.0, env="MODEL_TIMEOUT_SECONDS")
    model_max_attempts: int = Field(default=2, env="MODEL_MAX_ATTEMPTS")
    model_retry_backoff_seconds: float = Field(default=1.0, env="MODEL_RETRY_BACKOFF_SECONDS")

    # GitHub - personal access token, or App authentication
    github_token: Optional[str] = Field(default=None, env="GITHUB_TOKEN")
    github_app_id: Optional[str] = Field(default=None, env="GITHUB_APP_ID")
    github_private_key: Optional[str] = Field(default=None, env="GITHUB_PRIVATE_KEY")
    github_installation_id: Optional[str] = Field(default=None, env="GITHUB_INSTALLATION_ID")
    github_webhook_secret: Optional[str] = Field(default=None, env="GITHUB_WEBHOOK_SECRET")
    github_timeout_seconds: float = Field(default=30.0, env="GITHUB_TIMEOUT_SECONDS")

    # Slack failure alerts
    slack_bot_token: Optional[str] = Field(default=None, env="SLACK_BOT_TOKEN")
    slack_channel_id: Optional[str] = Field(default=None, env="SLACK_CHANNEL_ID")

    # Review Configuration
    max_files_per_review: int = Field(default=50, env="MAX_FILES_PER_REVIEW")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


settings = Settings()
