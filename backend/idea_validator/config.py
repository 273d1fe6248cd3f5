from pydantic_settings import BaseSettings
from functools import lru_cache
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_temperature: float = 0.7
    gemini_timeout_seconds: float = 60.0

    # Offline / demo mode
    use_mock_analysis: bool = False
    mock_delay_seconds: float = 1.0

    # App
    frontend_url: str = "http://localhost:5173"
    debug: bool = False

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def describe_analyzer(settings: Settings) -> str:
    """Short label of which analyzer the settings select, for startup logs and health checks."""
    if settings.use_mock_analysis:
        return "mock"
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY not configured. Analysis requests will fail until it is set.")
        return "gemini (unconfigured)"
    return f"gemini ({settings.gemini_model})"
