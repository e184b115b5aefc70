"""Application settings with environment variable support."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def is_configured(value: Optional[str], placeholder: str) -> bool:
    """Return True when a credential is present and not the placeholder sentinel."""
    if not value or not value.strip():
        return False
    return value.strip() != placeholder


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")

    # LLM Settings
    llm_mode: Literal["live", "mock"] = Field(default="live", description="LLM mode: live or mock")
    groq_api_key: Optional[str] = Field(default=None, description="Completion provider API key")
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="OpenAI-compatible completion endpoint",
    )
    chat_model: str = Field(default="llama-3.3-70b-versatile", description="Completion model")
    max_context_tokens: int = Field(default=131072, description="Provider context window in tokens")
    max_completion_tokens: int = Field(default=32768, description="Upper bound for max_tokens")
    chars_per_token: int = Field(default=4, gt=0, description="Approximate characters per token")
    input_budget_ratio: float = Field(
        default=0.8, gt=0.0, le=1.0, description="Share of the context window available to input"
    )
    completion_timeout: float = Field(default=30.0, description="Completion call timeout in seconds")
    max_retries: int = Field(default=3, ge=1, description="Completion attempts in total")
    retry_delays: list[float] = Field(
        default_factory=lambda: [1.0, 2.0, 4.0],
        description="Backoff schedule in seconds, indexed by attempt",
    )

    # Search Settings
    search_provider: Literal["serpapi", "tavily", "mock"] = Field(
        default="serpapi", description="Search provider"
    )
    serpapi_api_key: Optional[str] = Field(default=None, description="SerpApi API key")
    serpapi_engine: str = Field(default="google", description="SerpApi engine")
    tavily_api_key: Optional[str] = Field(default=None, description="Tavily API key")
    search_max_results: int = Field(default=5, description="Organic results requested per search")
    search_country: str = Field(default="us", description="Search country code")
    search_language: str = Field(default="en", description="Search interface language")
    search_timeout: float = Field(default=10.0, description="Search call timeout in seconds")

    # Credentials equal to this value are treated as missing
    placeholder_api_key: str = Field(default="your-key-here", description="Placeholder sentinel")

    @property
    def llm_configured(self) -> bool:
        """Whether completion calls can be made."""
        if self.llm_mode == "mock":
            return True
        return is_configured(self.groq_api_key, self.placeholder_api_key)

    @property
    def search_configured(self) -> bool:
        """Whether the selected search provider has a usable credential."""
        if self.search_provider == "mock":
            return True
        if self.search_provider == "tavily":
            return is_configured(self.tavily_api_key, self.placeholder_api_key)
        return is_configured(self.serpapi_api_key, self.placeholder_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
