from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "ExpenseInsights"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Report formatting
    CURRENCY_SYMBOL: str = Field(default="₹")
    CURRENCY_GROUPING: str = Field(default="indian")  # "indian" or "western"

    # Request limits
    MAX_EXPENSES: int = Field(default=5000)

    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:8000",
        ]
    )

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
