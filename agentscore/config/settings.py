"""
Configuration for AgentScore.
Environment variables and .env values, validated by pydantic-settings.
"""
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Supabase Configuration
    supabase_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_URL", "VITE_SUPABASE_URL"),
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY"),
    )
    use_supabase: bool = Field(default=False, alias="USE_SUPABASE")

    # Data Sources
    agents_json_url: str = Field(
        default="all-agents-with-reviews.json",
        alias="AGENTS_JSON_URL"
    )
    agent_load_limit: int = Field(default=500, alias="AGENT_LOAD_LIMIT")
    request_timeout: float = Field(default=10.0, alias="REQUEST_TIMEOUT")

    # Import
    import_batch_size: int = Field(default=50, gt=0, alias="IMPORT_BATCH_SIZE")

    # API Configuration
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")
    project_name: str = Field(default="AgentScore API", alias="PROJECT_NAME")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def supabase_configured(self) -> bool:
        """Both the project URL and the anon key are set."""
        return bool(self.supabase_url and self.supabase_anon_key)


# Global settings instance
settings = Settings()
