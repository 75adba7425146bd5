from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379/0"

    PRICE_CACHE_TTL: int = 60   # 60 seconds
    DRAFT_TTL: int = 3600  # 1 hour, one booking session
    RECEIPT_TTL: int = 30 * 24 * 3600  # 30 days
    IDEMPOTENCY_TTL: int = 300  # 5 minutes

    RATE_LIMIT: int = 100
    RATE_LIMIT_WINDOW: int = 600  # 10 minutes

    WEBHOOK_URL: Optional[str] = None
    WEBHOOK_TIMEOUT: int = 10
    WEBHOOK_RETRIES: int = 3

    API_TITLE: str = "GlobalEdge Shipping Quotes"
    API_DESCRIPTION: str = "Parcel and freight rate quotes, booking drafts and receipts"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
