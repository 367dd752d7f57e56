from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "bodycomp"
    db_username: str = "bodycomp"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    files_root: Path = Path("/app/files")
    max_upload_bytes: int = 10 * 1024 * 1024

    ai_provider: str = "openai"
    ai_openai_api_key: str = ""
    ai_openai_compatible_api_key: str = ""
    ai_openai_compatible_base_url: str = ""
    ai_openrouter_api_key: str = ""
    ai_groq_api_key: str = ""
    ai_together_api_key: str = ""
    ai_deepseek_api_key: str = ""
    ai_ollama_api_key: str = ""
    ai_timeout_seconds: int = 30
    ai_temperature: float = 0.0

    extraction_model_name: str = "gpt-4o"
    insights_model_name: str = "gpt-4o-mini"
