"""
Configuration module using Pydantic Settings.

Loads the OpenAI credential, the relay's network settings and the project
file locations from environment variables. Supports .env files for local
development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REMOTE_FILE_BASE = "https://infania.pyscriptapps.com/bones-copy/latest"

DEFAULT_ALLOWED_EXTENSIONS = (
    ".js",
    ".html",
    ".css",
    ".py",
    ".toml",
    ".json",
    ".md",
    ".png",
    ".svg",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = ""
    openai_chat_model: str = "gpt-4o-mini"

    # Project files
    project_root: str = "."
    remote_file_base: str = DEFAULT_REMOTE_FILE_BASE
    remote_timeout_seconds: float = 30.0
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS

    # Application Insights
    applicationinsights_connection_string: str = ""

    # App
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    allowed_origins: str = "*"

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def api_key_prefix(self) -> str:
        """First characters of the API key, safe to log."""
        return self.openai_api_key[:7]


def get_settings() -> Settings:
    """Factory for cached settings instance."""
    return Settings()
