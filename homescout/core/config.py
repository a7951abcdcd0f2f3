import os
from pydantic import BaseModel

class Settings(BaseModel):
    # Basic
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEFAULT_CURRENCY: str = os.getenv("CURRENCY", "USD")

    # Data providers
    FACTORS_PROVIDER: str = os.getenv("FACTORS_PROVIDER", "seeded")  # seeded | http
    FACTORS_BASE_URL: str | None = os.getenv("FACTORS_BASE_URL")
    TRENDS_PROVIDER: str = os.getenv("TRENDS_PROVIDER", "seeded")    # seeded | http
    TRENDS_BASE_URL: str | None = os.getenv("TRENDS_BASE_URL")
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

    # Cache (http providers only)
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "3600"))

    # Place keys are matched literally unless this is on
    NORMALIZE_PLACE_KEYS: bool = os.getenv("NORMALIZE_PLACE_KEYS", "false").lower() == "true"

    # Assistant
    ASSISTANT_REPLY_DELAY_MS: int = int(os.getenv("ASSISTANT_REPLY_DELAY_MS", "250"))

    # CORS
    ALLOW_ORIGINS: str = os.getenv("ALLOW_ORIGINS", "*")

    # Metrics
    PROMETHEUS_ENABLED: bool = os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"

settings = Settings()
