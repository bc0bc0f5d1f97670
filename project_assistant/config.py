"""Configuration management using pydantic-settings."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

from .actions.base import ActionSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=7790, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")

    # Database Configuration
    database_path: str = Field(default="./data/project_assistant.db", description="DuckDB database file")

    # Model Configuration
    anthropic_api_key: Optional[str] = Field(default=None, description="Anthropic API key")
    default_model: str = Field(default="claude-sonnet-4-20250514", description="Model used when the assistant has none")
    default_max_tokens: int = Field(default=4096, description="Reply token budget used when the assistant has none")
    model_timeout: float = Field(default=60.0, description="Model call timeout in seconds")
    max_history_messages: int = Field(default=40, ge=0, description="Rolling window of past messages sent to the model")

    # Deployment platform (Vercel)
    vercel_token: Optional[str] = Field(default=None, description="Vercel API token")
    vercel_team_id: Optional[str] = Field(default=None, description="Vercel team ID")
    vercel_api_base: str = Field(default="https://api.vercel.com", description="Vercel API base URL")

    # Identity provider (Supabase Auth)
    supabase_url: Optional[str] = Field(default=None, description="Supabase project URL")
    supabase_service_role_key: Optional[str] = Field(default=None, description="Supabase service role key")
    app_url: str = Field(default="http://localhost:3000", description="Public app URL used for reset redirects")

    # Action Configuration
    http_timeout: float = Field(default=15.0, description="Timeout for outbound API calls in seconds")
    health_probe_timeout: float = Field(default=5.0, description="Timeout for the deployment URL probe in seconds")
    logs_window_minutes: int = Field(default=5, description="Window for recent log retrieval")
    default_log_lines: int = Field(default=50, description="Default number of log lines")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[str] = Field(default="./logs/app.log", description="Log file path")

    def action_settings(self) -> ActionSettings:
        """Build the immutable configuration handed to action handlers."""
        return ActionSettings(
            vercel_token=self.vercel_token,
            vercel_team_id=self.vercel_team_id,
            vercel_api_base=self.vercel_api_base,
            supabase_url=self.supabase_url,
            supabase_service_role_key=self.supabase_service_role_key,
            app_url=self.app_url,
            health_probe_timeout=self.health_probe_timeout,
            logs_window_minutes=self.logs_window_minutes,
            default_log_lines=self.default_log_lines,
        )


# Global settings instance
settings = Settings()
