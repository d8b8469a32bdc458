from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"
    service_name: str = "knowledge-workspace-api"
    version: str = "0.1.0"

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    root_path: str = ""

    # Supabase
    supabase_url: str
    supabase_service_role_key: str
    storage_bucket: str = "documents"

    # Tokens and passwords
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_in: int = 60 * 60 * 24 * 7  # 7 days
    password_hash_iterations: int = 200_000

    # OpenAI
    openai_api_key: str = ""
    ai_model: str = "gpt-4o-mini"
    ai_tags_model: str = "gpt-4o-mini"
    ai_request_timeout: float = 30.0

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024

    # Sign-up and login throttling, per client IP and operation
    max_login_attempts: int = 5
    login_attempt_window: int = 300  # seconds
    enable_rate_limiting: bool = True


settings = Settings()
