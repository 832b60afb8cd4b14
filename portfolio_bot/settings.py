# portfolio_bot/settings.py
import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="Portfolio Bot")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")
    CORS_ORIGINS: list[str] = Field(default=["*"])

    # model clients
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = Field(default="gpt-4o-mini")
    USE_OLLAMA: bool = Field(default=False)
    OLLAMA_HOST: str = Field(default="http://localhost:11434")
    OLLAMA_MODEL: str = Field(default="mistral:7b-instruct")
    GENERATOR_CONFIG: str | None = None
    TEMPERATURE: float = Field(default=0.6)
    MAX_OUTPUT_TOKENS: int = Field(default=700)

    # knowledge + personas
    PROFILES_PATH: str = Field(default="data/profiles.json")
    LEGACY_PROFILE_PATH: str = Field(default="data/profile.json")
    KNOWLEDGE_DIR: str = Field(default="data/knowledge")
    CHUNK_MAX_LEN: int = Field(default=900)
    RETRIEVAL_TOP_K: int = Field(default=6)
    HISTORY_LIMIT: int = Field(default=20)
    KNOWLEDGE_RELOAD_SECONDS: float = Field(default=300.0)

    # owner + mailgun
    OWNER_NAME: str = Field(default="Sankalp Singh")
    OWNER_EMAIL: str | None = None
    MAILGUN_API_KEY: str | None = None
    MAILGUN_DOMAIN: str | None = None
    MAILGUN_API_BASE_URL: str = Field(default="https://api.mailgun.net")

    # read root-level .env.dev
    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME

    @property
    def has_mailgun(self) -> bool:
        return bool(self.MAILGUN_API_KEY and self.MAILGUN_DOMAIN and self.OWNER_EMAIL)


settings = Settings()
