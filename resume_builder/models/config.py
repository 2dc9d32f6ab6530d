from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional


class ApiConfig(BaseModel):
    """Resume web service endpoints."""
    base_url: str = Field(
        default="http://localhost:3000",
        description="Origin of the resume web service"
    )
    analyze_path: str = Field(default="/api/ai/analyze-job")
    generate_path: str = Field(default="/api/ai/generate-resume")
    categories_path: str = Field(default="/api/categories")
    timeout: float = Field(
        default=120.0,
        gt=0.0,
        description="Seconds to wait on a streamed AI response"
    )


class LLMConfig(BaseModel):
    """LLM provider configuration for the in-process backend and PDF parsing."""
    provider: Literal["openai", "ollama", "groq"] = Field(
        default="openai",
        description="Which LLM backend to use"
    )
    model: str = Field(
        default="gpt-4o-mini",
        description="Model identifier"
    )
    api_key: Optional[str] = Field(
        default=None,
        description="API key for cloud providers (not needed for Ollama)"
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Custom API endpoint (e.g., for Ollama: http://localhost:11434)"
    )
    temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Lower = more deterministic outputs"
    )


class ParserConfig(BaseModel):
    """PDF resume parsing limits."""
    max_pages: int = Field(
        default=50,
        ge=1,
        description="Pages read from an uploaded PDF"
    )
    max_text_length: int = Field(
        default=50_000,
        ge=1,
        description="Characters of extracted text sent for structuring"
    )


class AppConfig(BaseSettings):
    """Root application configuration.

    Loads from environment variables with the RESUME_ prefix.
    Example: RESUME_API__BASE_URL for api.base_url
    """
    backend: Literal["http", "llm"] = Field(
        default="http",
        description="Serve analysis/generation through the web service or an LLM directly"
    )
    api: ApiConfig = Field(default_factory=ApiConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)

    default_template: str = Field(
        default="simple",
        description="Template assigned to documents mapped from an uploaded PDF"
    )
    default_experience_level: str = Field(
        default="mid",
        description="Experience level sent when the analysis did not report one"
    )
    debug: bool = Field(
        default=False,
        description="Enable verbose logging"
    )

    model_config = SettingsConfigDict(
        env_prefix="RESUME_",
        env_nested_delimiter="__",
    )
