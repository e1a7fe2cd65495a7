"""Application configuration."""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application
    app_name: str = "Nyx AI"
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    api_prefix: str = ""
    cors_origins: List[str] = ["*"]

    # AI providers
    llm_provider: Literal["groq", "gemini"] = "groq"
    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com/openai/v1"
    groq_model: str = "llama-3.1-8b-instant"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2000

    # Email (SMTP)
    email_user: str = ""
    email_pass: str = ""
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_use_tls: bool = True
    notification_email: Optional[str] = None  # defaults to email_user

    # Storage
    data_dir: str = "data"
    upload_dir: str = "uploads"

    # URL fetching
    fetch_timeout_seconds: float = 15.0

    @property
    def operator_email(self) -> str:
        return self.notification_email or self.email_user


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
