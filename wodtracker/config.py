# wodtracker/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str
    DATABASE_URL: str
    CORS_ORIGINS: str
    APP_URL: str

    ENVIRONMENT: str = "development"
    DATABASE_ECHO: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"

    # Calendar days and months for statistics are taken in this zone
    STATS_TIMEZONE: str = "UTC"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
