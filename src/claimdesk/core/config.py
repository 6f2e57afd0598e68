from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = "dev"

    database_url: str = "sqlite:///./claimdesk.db"

    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = None
    access_token_exp_minutes: int = 60 * 24

    org_header_name: str = "X-Organization-Id"

    claim_number_max_attempts: int = 5
    default_page_size: int = 20
    max_page_size: int = 100

    cors_allow_origins: list[str] = ["*"]


settings = Settings()
