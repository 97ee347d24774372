from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    llm_provider: str = "openai"  # openai | anthropic | custom

    # OpenAI / custom
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_base_url: str = "https://api.openai.com/v1"
    openai_json_mode: bool = True

    # Anthropic
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-opus-4-6"

    # Completion
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    completion_timeout_seconds: float = Field(default=60.0, gt=0)
    completion_max_tokens: int = Field(default=1500, ge=1)

    # Generation
    platforms: list[str] = ["twitter", "instagram", "tiktok", "youtube"]
    default_vibe: str = "Excited"

    # Transcript lookup
    transcript_languages: list[str] = ["en"]
    transcript_max_chars: int = Field(default=12_000, ge=1)
    title_lookup_timeout_seconds: float = Field(default=10.0, gt=0)

    # HTTP server
    http_host: str = "0.0.0.0"
    http_port: int = 8000

    # Telegram front-end (optional, only needed for main.py)
    telegram_bot_token: str = ""

    log_level: str = "INFO"


settings = Settings()
