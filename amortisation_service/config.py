"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./amortisation.db"

    # Service
    service_name: str = "amortisation-service"
    log_level: str = "INFO"

    # Loan limits
    min_principal: Decimal = Decimal("10000.00")
    max_principal: Decimal = Decimal("100000000.00")  # 10 crore

    # Schedule cache
    schedule_cache_enabled: bool = True


settings = Settings()
