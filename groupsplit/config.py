"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "groupsplit-gateway"
    log_level: str = "INFO"

    # Expense validation
    split_tolerance: float = 0.01  # Max drift between splits sum and expense amount
    percentage_tolerance: float = 0.1  # Max drift of percentage splits from 100%


settings = Settings()
