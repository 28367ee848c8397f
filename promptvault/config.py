"""PromptVault configuration — loaded from environment / .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="PROMPTVAULT_", extra="ignore")

    env: str = "development"
    database_url: str = "sqlite+aiosqlite:///./promptvault.db"
    log_level: str = "INFO"

    # Collection new prompts land in when the caller does not name one
    default_vault_id: str = "default"

    cors_origins: list[str] = ["http://localhost:3000"]


settings = Settings()
