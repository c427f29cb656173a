"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Feed
    FEED_URL: str = "https://bandcamp.com/api/salesfeed/1/get_initial"
    POLL_INTERVAL_SECONDS: int = 10
    POLL_MAX_OVERLAP: int = 5

    # Transport
    REQUEST_TIMEOUT: float = 30.0
    USER_AGENT: str = "salesfeed-watcher/1.0"

    # Enrichment
    TAG_RETRY_DELAY_SECONDS: float = 5.0
    PALETTE_COLOR_COUNT: int = 5
    PALETTE_QUALITY: int = 10

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
