"""Configuration module using pydantic-settings for type-safe env variable loading."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SummarizerProvider = Literal["gemini", "openai", "anthropic", "local"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Uses pydantic-settings for type-safe configuration with validation.
    Automatically loads from .env file if present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost:4173",
        ],
        description="Origins allowed to call the API from a browser",
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./ai_search.db",
        description="SQLAlchemy database URL for users, searches and collections",
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL statements to the log",
    )

    # Auth Configuration
    jwt_secret: str = Field(
        default="change-me-in-production-insecure-development-key",
        description="Secret used to sign JWT access tokens",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expires_minutes: int = Field(
        default=7 * 24 * 60,
        ge=1,
        description="Access token lifetime in minutes (default: 7 days)",
    )

    # Search Provider Configuration (DuckDuckGo Instant Answer API, no key needed)
    search_endpoint: str = Field(
        default="https://api.duckduckgo.com/",
        description="DuckDuckGo Instant Answer API endpoint",
    )
    search_app_tag: str = Field(
        default="ai-search",
        description="Application tag sent as the 't' parameter to DuckDuckGo",
    )
    search_timeout: int = Field(
        default=30,
        ge=1,
        le=120,
        description="Timeout in seconds for search API requests",
    )
    max_snippet_length: int = Field(
        default=450,
        ge=50,
        le=450,
        description="Snippet budget before truncation (a '...' suffix is appended)",
    )
    use_duckduckgo_backup: bool = Field(
        default=False,
        description="Try a DuckDuckGo text search before falling back to generated links",
    )
    max_search_results: int = Field(
        default=5,
        ge=1,
        le=25,
        description="Maximum number of results from the DuckDuckGo text search tier",
    )

    # =========================================================================
    # Summarizer Configuration
    # =========================================================================
    summarizer_provider: SummarizerProvider = Field(
        default="gemini",
        description="Summarizer backend: gemini (REST), openai, anthropic, or local",
    )
    summarizer_timeout: int = Field(
        default=60,
        ge=5,
        le=300,
        description="Timeout in seconds for summarizer calls",
    )
    summarizer_max_sources: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum number of search results embedded in the prompt",
    )
    summarizer_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Temperature for LangChain-backed summarizers",
    )
    summarizer_max_tokens: int = Field(
        default=2048,
        ge=100,
        le=8192,
        description="Maximum tokens for LangChain-backed summarizers",
    )

    # Google Gemini Configuration
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key (required if summarizer_provider='gemini')",
    )
    gemini_endpoint: str = Field(
        default=(
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-1.5-flash:generateContent"
        ),
        description="Gemini generateContent endpoint",
    )

    # OpenAI Configuration
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key (required if summarizer_provider='openai')",
    )
    openai_model: str = Field(default="gpt-4o-mini")

    # Anthropic Configuration
    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key (required if summarizer_provider='anthropic')",
    )
    anthropic_model: str = Field(default="claude-3-5-sonnet-20241022")

    # Local LLM Configuration (LM Studio / Ollama / vLLM)
    local_llm_base_url: str = Field(
        default="http://127.0.0.1:1234/v1",
        description="Base URL for local OpenAI-compatible API (LM Studio, Ollama, vLLM)",
    )
    local_llm_model: str = Field(default="local-model")
    local_llm_api_key: str = Field(
        default="not-needed",
        description="API key for local LLM (usually 'not-needed' for local servers)",
    )


# Global settings instance
settings = Settings()
