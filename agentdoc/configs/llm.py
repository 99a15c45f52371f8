"""
Language model configuration settings.

Gemini chat and embedding models used through LangChain. A missing API
key is tolerated: embeddings degrade to fallback vectors and chat
reports generation as unavailable.

Dependencies: pydantic, pydantic_settings
System role: LLM provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Chat and embedding model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        description="Google AI API key (falls back to GOOGLE_API_KEY env var)",
    )
    chat_model: str = Field(default="gemini-2.5-flash", description="Chat model ID")
    temperature: float = Field(default=0.2, description="Sampling temperature")
    max_tool_rounds: int = Field(
        default=2,
        description="Maximum preview-source tool round trips per answer",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID (supports truncation to 1536 dims)",
    )
