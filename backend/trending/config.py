from functools import lru_cache
from typing import Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    moonshot_api_key: Optional[str] = Field(default=None, alias="MOONSHOT_API_KEY")
    moonshot_api_base: HttpUrl = Field(
        default="https://api.moonshot.cn/v1", alias="MOONSHOT_API_BASE"
    )
    moonshot_model: str = Field(default="moonshot-v1-8k", alias="MOONSHOT_MODEL")
    llm_temperature: float = Field(default=0.3, alias="LLM_TEMPERATURE")
    llm_timeout_seconds: float = Field(default=60, alias="LLM_TIMEOUT_SECONDS")

    github_token: Optional[str] = Field(default=None, alias="GITHUB_TOKEN")
    github_base_url: HttpUrl = Field(
        default="https://api.github.com", alias="GITHUB_BASE_URL"
    )
    github_trending_url: str = Field(
        default="https://github.com/trending?since=daily", alias="GITHUB_TRENDING_URL"
    )
    github_proxy: Optional[str] = Field(default=None, alias="GITHUB_PROXY")
    github_timeout_seconds: float = Field(default=20, alias="GITHUB_TIMEOUT_SECONDS")

    # "fixed" sleeps llm_delay_seconds after every LLM call, "token_bucket" paces by rate
    rate_limit_strategy: str = Field(default="fixed", alias="RATE_LIMIT_STRATEGY")
    llm_delay_seconds: float = Field(default=70, alias="LLM_DELAY_SECONDS")
    rate_limit_per_minute: float = Field(default=1, alias="RATE_LIMIT_PER_MINUTE")
    rate_limit_burst: int = Field(default=1, alias="RATE_LIMIT_BURST")

    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # ignore unrelated env vars to avoid validation errors


@lru_cache
def get_settings() -> Settings:
    return Settings()
