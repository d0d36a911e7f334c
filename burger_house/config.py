"""
Application configuration using Pydantic Settings
"""

from decimal import Decimal
from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Pricing
    default_tax_rate: Decimal = Decimal("0.08")

    # Booking
    slot_capacity: int = 10
    max_party_size: int = 20
    max_tables: int = 50

    # Kitchen estimate window (minutes after order creation)
    ready_min_minutes: int = 30
    ready_max_minutes: int = 45

    # Persistence
    store_backend: str = "memory"  # memory, sql
    database_url: str = "sqlite+aiosqlite:///./burger_house.db"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    cors_origins: str = "http://localhost:5173"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    class Config:
        env_prefix = "BURGER_HOUSE_"
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
