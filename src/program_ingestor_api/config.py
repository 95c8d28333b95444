"""Configuration settings for the program ingestor API."""
import os
from typing import List, Literal


EnvironmentType = Literal["development", "staging", "production"]
SummaryProvider = Literal["openai", "anthropic"]

DEFAULT_MAX_UPLOAD_BYTES = 20 * 1024 * 1024
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:3001"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() == "true"


class Settings:
    """Application settings."""

    # Feature flags
    USE_LLM_SUMMARY: bool = False
    HELICONE_ENABLED: bool = False

    # Environment
    ENVIRONMENT: EnvironmentType = "development"

    # Summary collaborator
    SUMMARY_PROVIDER: SummaryProvider = "openai"
    SUMMARY_MODEL: str | None = None

    # API Keys
    OPENAI_API_KEY: str | None = None
    ANTHROPIC_API_KEY: str | None = None
    HELICONE_API_KEY: str | None = None

    # HTTP
    MAX_UPLOAD_BYTES: int = DEFAULT_MAX_UPLOAD_BYTES
    CORS_ORIGINS: List[str] = []

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        # Feature flags
        self.USE_LLM_SUMMARY = _env_flag("USE_LLM_SUMMARY")
        self.HELICONE_ENABLED = _env_flag("HELICONE_ENABLED")

        provider = os.getenv("SUMMARY_PROVIDER", "openai").lower()
        self.SUMMARY_PROVIDER = provider if provider in ("openai", "anthropic") else "openai"  # type: ignore
        self.SUMMARY_MODEL = os.getenv("SUMMARY_MODEL") or None

        # API Keys
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
        self.HELICONE_API_KEY = os.getenv("HELICONE_API_KEY")

        try:
            self.MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES)))
        except ValueError:
            self.MAX_UPLOAD_BYTES = DEFAULT_MAX_UPLOAD_BYTES

        origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
        self.CORS_ORIGINS = [origin.strip() for origin in origins.split(",") if origin.strip()]


settings = Settings()
