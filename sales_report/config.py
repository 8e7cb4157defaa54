"""
Service settings, read from SALES_REPORT_* environment variables or .env
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SALES_REPORT_",
        env_file=".env",
        extra="ignore",
    )

    APP_NAME: str = "Sales Report Service"
    SEED_ON_STARTUP: bool = True
    SEED: int = 42  # RNG seed for demo data
    LOG_LEVEL: str = "INFO"


settings = Settings()
